"""GitHub backed data sources, all calls go through the `gh` CLI so no token setup is needed."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from shutil import which
from typing import Any, ClassVar, Iterable
from urllib.parse import quote

from ask_shell._internal._run import run_and_wait

from tag_changelog.commits.models import RawCommit
from tag_changelog.errors import IdentityLookupError, RemoteHistoryFetchError
from tag_changelog.git_usage.url import RemoteRepo

logger = logging.getLogger(__name__)


def gh_available() -> bool:
    return which("gh") is not None


def _gh_api(path: str, cwd: Path | None):
    return run_and_wait(
        f"gh api {shlex.quote(path)}",
        cwd=cwd,
        allow_non_zero_exit=True,
        skip_progress_output=True,
    )


def _login(user: dict[str, Any] | None) -> str:
    if not user:
        return ""
    return user.get("login") or ""


def parse_commit_record(record: dict[str, Any]) -> RawCommit:
    commit = record["commit"]
    author = commit["author"]
    committer = commit["committer"]
    return RawCommit.from_message(
        record["sha"],
        commit["message"],
        author_name=author["name"],
        author_mail=author["email"],
        author_handle=_login(record.get("author")),
        committer_name=committer["name"],
        committer_mail=committer["email"],
        committer_handle=_login(record.get("committer")),
    )


@dataclass
class GhCommitHistory:
    PER_PAGE: ClassVar[int] = 100
    remote: RemoteRepo
    cwd: Path | None = None

    def fetch_page(self, sha: str, page: int) -> list[dict[str, Any]]:
        query = f"per_page={self.PER_PAGE}&page={page}&sha={sha}"
        result = _gh_api(f"repos/{self.remote.full_name}/commits?{query}", self.cwd)
        if not result.clean_complete:
            raise RemoteHistoryFetchError(page, result.stderr_one_line or "gh failed")
        try:
            records = result.parse_output(list)
        except Exception as e:
            raise RemoteHistoryFetchError(page, repr(e)) from e
        if not isinstance(records, list):
            raise RemoteHistoryFetchError(page, f"expected a list, got {records!r}")
        return records

    def iter_pages(self, sha: str, stop_sha: str = "") -> Iterable[list[RawCommit]]:
        """Pages of commits reachable from `sha`, newest first, `stop_sha` excluded"""
        page = 1
        while True:
            records = self.fetch_page(sha, page)
            try:
                commits = [parse_commit_record(record) for record in records]
            except (KeyError, TypeError) as e:
                raise RemoteHistoryFetchError(page, f"invalid record: {e!r}") from e
            if stop_sha and (
                stop_index := next(
                    (i for i, commit in enumerate(commits) if commit.sha == stop_sha),
                    None,
                )
            ) is not None:
                yield commits[:stop_index]
                return
            yield commits
            if len(records) < self.PER_PAGE:
                return
            page += 1


def fetch_remote_history(
    history: GhCommitHistory, to_sha: str, from_sha: str
) -> list[RawCommit]:
    """All pages are fetched before anything is used, a failing page discards the rest"""
    commits: list[RawCommit] = []
    for page in history.iter_pages(to_sha, stop_sha=from_sha):
        commits.extend(page)
    logger.info(f"fetched {len(commits)} commits from {history.remote.web_url}")
    return commits


@dataclass
class GhUserLookup:
    cwd: Path | None = None

    def find_handle(self, mail: str) -> str | None:
        result = _gh_api(f"search/users?q={quote(mail)}+in:email", self.cwd)
        if not result.clean_complete:
            raise IdentityLookupError(mail, result.stderr_one_line or "gh failed")
        try:
            response = result.parse_output(dict)
        except Exception as e:
            raise IdentityLookupError(mail, repr(e)) from e
        items = response.get("items") or []
        if not items:
            return None
        return _login(items[0]) or None
