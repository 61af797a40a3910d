from dataclasses import dataclass
from pathlib import Path

import pytest
from git import Actor, Repo
from zero_3rdparty.file_utils import ensure_parents_write_text

from tag_changelog.git_usage.gateway import RepoGateway
from tag_changelog.settings import ChangelogSettings

DEFAULT_AUTHOR = Actor("Ada Lovelace", "ada@example.com")
OTHER_AUTHOR = Actor("Grace Hopper", "grace@example.com")
GITHUB_REMOTE_URL = "git@github.com:octo/tools.git"


@dataclass
class RepoBuilder:
    path: Path
    repo: Repo
    commit_count: int = 0

    def commit(self, message: str, author: Actor = DEFAULT_AUTHOR) -> str:
        self.commit_count += 1
        file_name = f"change_{self.commit_count}.txt"
        ensure_parents_write_text(self.path / file_name, message)
        self.repo.index.add([file_name])
        date = self._next_date()
        commit = self.repo.index.commit(
            message,
            author=author,
            committer=author,
            author_date=date,
            commit_date=date,
        )
        return commit.hexsha

    def _next_date(self) -> str:
        # fixed dates keep the walk order stable
        minutes, seconds = divmod(self.commit_count, 60)
        return f"2025-01-01T00:{minutes:02d}:{seconds:02d}"

    def branch(self, name: str, sha: str) -> None:
        self.repo.create_head(name, sha).checkout()

    def checkout(self, name: str) -> None:
        self.repo.heads[name].checkout()

    def merge(self, name: str, message: str) -> str:
        """No fast forward, the result always has two parents"""
        self.commit_count += 1
        date = self._next_date()
        self.repo.git.merge(
            "--no-ff",
            "-m",
            message,
            name,
            env={"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date},
        )
        return self.repo.head.commit.hexsha

    def commits(self, *messages: str) -> list[str]:
        return [self.commit(message) for message in messages]

    def tag(self, name: str, sha: str = "HEAD") -> None:
        self.repo.create_tag(name, ref=sha)

    def add_remote(self, url: str = GITHUB_REMOTE_URL, name: str = "origin") -> None:
        self.repo.create_remote(name, url)

    def gateway(self, check_clean: bool = True) -> RepoGateway:
        return RepoGateway.open(self.path, check_clean=check_clean)


@pytest.fixture(autouse=True)
def _no_env_settings(monkeypatch):
    for name in ["FROM_REF", "TO_REF", "TAG_PREFIX", "REMOTE_NAME", "IS_BOT"]:
        monkeypatch.delenv(f"TAG_CHANGELOG_{name}", raising=False)


@pytest.fixture(autouse=True)
def _no_gh_cli(monkeypatch):
    monkeypatch.setattr("tag_changelog.cli.workflows.gh_available", lambda: False)


@pytest.fixture()
def repo_builder(tmp_path) -> RepoBuilder:
    path = tmp_path / "repo"
    path.mkdir()
    repo = Repo.init(path)
    with repo.config_writer() as config:
        config.set_value("user", "name", DEFAULT_AUTHOR.name)
        config.set_value("user", "email", DEFAULT_AUTHOR.email)
    return RepoBuilder(path=path, repo=repo)


@pytest.fixture()
def settings(repo_builder: RepoBuilder) -> ChangelogSettings:
    return ChangelogSettings(
        repo_path=repo_builder.path,
        lookup_handles=False,
        use_remote_history=False,
    )


@dataclass
class MergedRelease:
    root: str
    on_main: str  # v1.1.0
    hotfix: str  # v1.0.1, on a branch from root
    merge: str
    head: str


@pytest.fixture()
def merged_release(repo_builder: RepoBuilder) -> MergedRelease:
    root = repo_builder.commit("chore: init")
    main_branch = repo_builder.repo.active_branch.name
    on_main = repo_builder.commit("feat: on main")
    repo_builder.tag("v1.1.0")
    repo_builder.branch("release-1.0", root)
    hotfix = repo_builder.commit("fix: hotfix")
    repo_builder.tag("v1.0.1")
    repo_builder.checkout(main_branch)
    merge = repo_builder.merge("release-1.0", "chore: merge release-1.0")
    head = repo_builder.commit("fix: after merge")
    return MergedRelease(root, on_main, hotfix, merge, head)
