from pathlib import Path


class ChangelogError(Exception):
    """Base for errors that abort a changelog run"""

    pass


class NotAGitRepositoryError(ChangelogError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Not a git repository @ {path}: {reason}")


class EmptyRepositoryError(ChangelogError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"The repository is empty @ {path}")


class RepositoryNotCleanError(ChangelogError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"The repository is not clean @ {path}: {reason}")


class UnresolvableRefError(ChangelogError):
    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Could not resolve {ref!r} to a commit")


class EmptyRangeError(ChangelogError):
    def __init__(self, from_sha: str, to_sha: str):
        self.from_sha = from_sha
        self.to_sha = to_sha
        super().__init__(f"No commits between from={from_sha[:7]} and to={to_sha[:7]}")


class RemoteHistoryFetchError(ChangelogError):
    def __init__(self, page: int, reason: str):
        self.page = page
        self.reason = reason
        super().__init__(f"Failed to fetch remote history page {page}: {reason}")


class RemoteURLNotFound(Exception):
    def __init__(self, reason: str, path: Path):
        self.reason = reason
        self.path = path
        super().__init__(f"Could not find remote URL for git repo @ {path}: {reason}")


class IdentityLookupError(Exception):
    """Recovered by the identity resolver, the handle stays empty"""

    def __init__(self, mail: str, reason: str):
        self.mail = mail
        self.reason = reason
        super().__init__(f"Handle lookup failed for {mail}: {reason}")
