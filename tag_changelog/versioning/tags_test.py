from dataclasses import dataclass, field

from tag_changelog.versioning.release import segment_release
from tag_changelog.versioning.tags import build_tag_index
from tag_changelog.versioning.version_bump import BumpType, SemVersion


@dataclass
class FakeTags:
    tags: dict[str, str | None] = field(default_factory=dict)

    def list_tags(self) -> list[str]:
        return list(self.tags)

    def resolve_tag(self, tag_name: str) -> str | None:
        return self.tags[tag_name]


@dataclass
class FakeSegment:
    from_sha: str
    to_sha: str
    has_breaking: bool = False
    has_feature: bool = False


def test_build_tag_index_filters_non_version_tags():
    source = FakeTags(
        {"v1.1.0": "b" * 40, "latest": "b" * 40, "v1.0.0": "a" * 40, "1.0": "a" * 40}
    )
    index = build_tag_index(source, "v")
    assert index.tags == ["v1.1.0", "v1.0.0"]
    assert index.tag_for("a" * 40) == "v1.0.0"
    assert index.commit_for("v1.1.0") == "b" * 40
    assert index.commit_for("latest") is None


def test_build_tag_index_accepts_custom_prefix():
    index = build_tag_index(FakeTags({"release-2.0.0": "c" * 40}), "release-")
    assert index.is_tagged("c" * 40)
    assert index.version_for("c" * 40, "release-") == SemVersion(2, 0, 0)


def test_same_commit_keeps_smallest_tag_name():
    sha = "d" * 40
    for order in [["v1.0.0", "v1.0.0-rc.1"], ["v1.0.0-rc.1", "v1.0.0"]]:
        index = build_tag_index(FakeTags({name: sha for name in order}), "v")
        assert index.tag_for(sha) == "v1.0.0"
        assert index.commit_for("v1.0.0-rc.1") == sha


def test_unresolved_tags_are_skipped():
    index = build_tag_index(FakeTags({"v1.0.0": None, "v0.9.0": "e" * 40}), "v")
    assert index.tags == ["v0.9.0"]


def test_segment_release_tagged_to_uses_tag_name():
    index = build_tag_index(FakeTags({"v1.1.0": "b" * 40, "v1.0.0": "a" * 40}), "v")
    release = segment_release(FakeSegment("a" * 40, "b" * 40), index, "v")
    assert (release.from_name, release.to_name) == ("v1.0.0", "v1.1.0")
    assert not release.is_computed


def test_segment_release_untagged_to_is_computed():
    index = build_tag_index(FakeTags({"v1.1.0": "b" * 40}), "v")
    segment = FakeSegment("b" * 40, "f" * 40, has_feature=True)
    release = segment_release(segment, index, "v")
    assert release.to_name == "v1.2.0"
    assert release.candidates
    assert release.candidates.default_bump == BumpType.MINOR
    assert release.with_bump(BumpType.MAJOR).to_name == "v2.0.0"


def test_segment_release_without_tags_starts_from_zero():
    segment = FakeSegment("a" * 40, "f" * 40, has_breaking=True)
    release = segment_release(segment, build_tag_index(FakeTags(), "v"), "v")
    assert release.from_name == "aaaaaaa"
    assert release.to_name == "v1.0.0"
