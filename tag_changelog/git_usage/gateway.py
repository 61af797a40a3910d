from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from git import Commit as GitCommit
from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import BadName, BadObject

from tag_changelog.commits.models import RawCommit
from tag_changelog.errors import (
    EmptyRepositoryError,
    NotAGitRepositoryError,
    RemoteURLNotFound,
    RepositoryNotCleanError,
    UnresolvableRefError,
)

logger = logging.getLogger(__name__)
_IN_PROGRESS_MARKERS = {
    "MERGE_HEAD": "merge in progress",
    "rebase-merge": "rebase in progress",
    "rebase-apply": "rebase in progress",
    "CHERRY_PICK_HEAD": "cherry-pick in progress",
    "REVERT_HEAD": "revert in progress",
    "BISECT_LOG": "bisect in progress",
}


def as_raw_commit(commit: GitCommit) -> RawCommit:
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return RawCommit.from_message(
        commit.hexsha,
        message,
        author_name=commit.author.name or "",
        author_mail=commit.author.email or "",
        committer_name=commit.committer.name or "",
        committer_mail=commit.committer.email or "",
    )


def _check_clean(repo: Repo, path: Path) -> None:
    git_dir = Path(repo.git_dir)
    for marker, reason in _IN_PROGRESS_MARKERS.items():
        if (git_dir / marker).exists():
            raise RepositoryNotCleanError(path, reason)
    if repo.is_dirty(index=True, working_tree=True, untracked_files=False):
        raise RepositoryNotCleanError(path, "uncommitted changes")
    if untracked := repo.untracked_files:
        raise RepositoryNotCleanError(
            path, f"untracked files: {', '.join(sorted(untracked)[:5])}"
        )


@dataclass
class RepoGateway:
    """Read-only access to the commit graph, all ids are full hex shas"""

    repo: Repo
    path: Path

    @classmethod
    def open(cls, path: Path, *, check_clean: bool = True) -> RepoGateway:
        try:
            repo = Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepositoryError(path, repr(e)) from e
        if not repo.head.is_valid():
            raise EmptyRepositoryError(path)
        if check_clean:
            _check_clean(repo, path)
        return cls(repo=repo, path=path)

    def head(self) -> str:
        return self.repo.head.commit.hexsha

    def resolve_ref(self, name: str) -> str:
        try:
            return self.repo.commit(name).hexsha
        except (BadName, BadObject, ValueError) as e:
            raise UnresolvableRefError(name) from e

    def resolve_tag(self, tag_name: str) -> str | None:
        try:
            return self.repo.tags[tag_name].commit.hexsha
        except (IndexError, ValueError) as e:
            logger.warning(f"tag {tag_name} does not point to a commit: {e!r}")
            return None

    def list_tags(self) -> list[str]:
        """Most recent first, the reverse of the ref listing"""
        return [tag.name for tag in reversed(self.repo.tags)]

    def root(self, rev: str) -> str:
        roots = list(self.repo.iter_commits(rev, max_parents=0))
        assert roots, f"no root commit found for {rev}"
        return roots[-1].hexsha

    def walk(self, rev: str) -> Iterable[str]:
        for commit in self.repo.iter_commits(rev):
            yield commit.hexsha

    def walk_range(self, from_sha: str, to_sha: str) -> Iterable[str]:
        """Reverse-chronological, from_sha exclusive and to_sha inclusive"""
        for commit in self.repo.iter_commits(f"{from_sha}..{to_sha}"):
            yield commit.hexsha

    def get_commit(self, sha: str) -> RawCommit:
        return as_raw_commit(self.repo.commit(sha))

    def iter_raw_commits(
        self, from_sha: str, to_sha: str, excluded: Sequence[str] = ()
    ) -> Iterable[RawCommit]:
        """to_sha history without commits reachable from from_sha or excluded"""
        hidden = [f"^{sha}" for sha in (from_sha, *excluded)]
        for commit in self.repo.iter_commits([to_sha, *hidden]):
            yield as_raw_commit(commit)

    def remote_url(self, remote_name: str) -> str:
        try:
            remote = self.repo.remote(remote_name)
        except ValueError as e:
            raise RemoteURLNotFound(f"no remote named {remote_name}", self.path) from e
        if urls := list(remote.urls):
            return urls[0]
        raise RemoteURLNotFound(f"no urls for {remote_name}", self.path)
