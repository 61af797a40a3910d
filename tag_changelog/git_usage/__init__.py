# Git operations domain

from .gateway import RepoGateway, as_raw_commit
from .github import (
    GhCommitHistory,
    GhUserLookup,
    fetch_remote_history,
    gh_available,
    parse_commit_record,
)
from .url import RemoteRepo, parse_remote_url, remove_credentials

__all__ = [
    "GhCommitHistory",
    "GhUserLookup",
    "RemoteRepo",
    "RepoGateway",
    "as_raw_commit",
    "fetch_remote_history",
    "gh_available",
    "parse_commit_record",
    "parse_remote_url",
    "remove_credentials",
]
