import json
from dataclasses import dataclass, field

import pytest

from tag_changelog.errors import IdentityLookupError, RemoteHistoryFetchError
from tag_changelog.git_usage.github import (
    GhCommitHistory,
    GhUserLookup,
    fetch_remote_history,
    parse_commit_record,
)
from tag_changelog.git_usage.url import RemoteRepo

remote = RemoteRepo(host="github.com", owner="octo", name="tools")


@dataclass
class FakeRun:
    stdout: str = ""
    stderr_one_line: str = ""
    clean_complete: bool = True

    def parse_output(self, output_t):
        parsed = json.loads(self.stdout)
        assert isinstance(parsed, output_t)
        return parsed


@dataclass
class FakeGh:
    responses: list[FakeRun] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)

    def __call__(self, command: str, **kwargs) -> FakeRun:
        self.commands.append(command)
        return self.responses.pop(0)


def _record(sha: str, login: str = "ada", message: str = "feat: a") -> dict:
    user = {"name": "Ada", "email": "ada@example.com", "date": "2025-01-01T00:00:00Z"}
    return {
        "sha": sha,
        "commit": {"message": message, "author": user, "committer": user},
        "author": {"login": login},
        "committer": None,
    }


def _page(*records: dict) -> FakeRun:
    return FakeRun(stdout=json.dumps(list(records)))


@pytest.fixture()
def fake_gh(monkeypatch) -> FakeGh:
    gh = FakeGh()
    monkeypatch.setattr("tag_changelog.git_usage.github.run_and_wait", gh)
    return gh


def test_parse_commit_record():
    raw = parse_commit_record(_record("1" * 40, message="fix: b\n\nbody"))
    assert (raw.subject, raw.body, raw.author_handle) == ("fix: b", "body", "ada")
    assert raw.committer_handle == ""
    assert raw.known_handles() == {"ada@example.com": "ada"}


def test_history_stops_at_stop_sha(fake_gh, monkeypatch):
    monkeypatch.setattr(GhCommitHistory, "PER_PAGE", 2)
    fake_gh.responses = [
        _page(_record("4" * 40), _record("3" * 40)),
        _page(_record("2" * 40), _record("1" * 40)),
    ]
    history = GhCommitHistory(remote=remote)
    commits = fetch_remote_history(history, "4" * 40, "2" * 40)
    assert [c.sha[0] for c in commits] == ["4", "3"]
    assert len(fake_gh.commands) == 2
    assert "repos/octo/tools/commits?per_page=2&page=2&sha=" in fake_gh.commands[1]


def test_history_stops_on_short_page(fake_gh):
    fake_gh.responses = [_page(_record("2" * 40), _record("1" * 40))]
    commits = fetch_remote_history(GhCommitHistory(remote=remote), "2" * 40, "")
    assert len(commits) == 2
    assert len(fake_gh.commands) == 1


def test_history_failure_is_fatal(fake_gh, monkeypatch):
    monkeypatch.setattr(GhCommitHistory, "PER_PAGE", 1)
    fake_gh.responses = [
        _page(_record("2" * 40)),
        FakeRun(clean_complete=False, stderr_one_line="HTTP 502"),
    ]
    with pytest.raises(RemoteHistoryFetchError, match="page 2: HTTP 502"):
        fetch_remote_history(GhCommitHistory(remote=remote), "2" * 40, "")


def test_history_invalid_record_is_fatal(fake_gh):
    fake_gh.responses = [FakeRun(stdout=json.dumps([{"sha": "1"}]))]
    with pytest.raises(RemoteHistoryFetchError, match="invalid record"):
        fetch_remote_history(GhCommitHistory(remote=remote), "1" * 40, "")


def test_user_lookup(fake_gh):
    fake_gh.responses = [
        FakeRun(stdout=json.dumps({"items": [{"login": "ada"}]})),
        FakeRun(stdout=json.dumps({"items": []})),
    ]
    lookup = GhUserLookup()
    assert lookup.find_handle("ada@example.com") == "ada"
    assert lookup.find_handle("nobody@example.com") is None
    assert "search/users?q=ada%40example.com+in:email" in fake_gh.commands[0]


def test_user_lookup_failure(fake_gh):
    fake_gh.responses = [FakeRun(clean_complete=False, stderr_one_line="rate limit")]
    with pytest.raises(IdentityLookupError, match="rate limit"):
        GhUserLookup().find_handle("ada@example.com")
