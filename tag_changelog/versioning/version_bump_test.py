import pytest

from tag_changelog.versioning.version_bump import (
    BumpType,
    SemVersion,
    VersionCandidates,
    default_bump,
)


def test_parse_with_prefix_and_build():
    version = SemVersion.parse("release-1.2.3+build.7", prefix="release-")
    assert version == SemVersion(1, 2, 3, build="build.7")
    assert str(version) == "1.2.3+build.7"


def test_parse_falls_back_to_v_prefix():
    assert SemVersion.parse("v2.0.0", prefix="release-") == SemVersion(2, 0, 0)


def test_parse_invalid_raises():
    with pytest.raises(ValueError, match="Invalid version string"):
        SemVersion.parse("v1.2")


_ordered_versions = [
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-alpha.beta",
    "1.0.0-beta",
    "1.0.0-beta.2",
    "1.0.0-beta.11",
    "1.0.0-rc.1",
    "1.0.0",
    "1.0.1",
    "1.1.0",
    "2.0.0",
]


def test_precedence_follows_semver():
    versions = [SemVersion.parse(raw) for raw in _ordered_versions]
    assert sorted(reversed(versions)) == versions


_bump_cases = [
    (True, True, BumpType.MAJOR),
    (True, False, BumpType.MAJOR),
    (False, True, BumpType.MINOR),
    (False, False, BumpType.PATCH),
]


@pytest.mark.parametrize("has_breaking,has_feature,expected", _bump_cases)
def test_default_bump(has_breaking, has_feature, expected):
    assert default_bump(has_breaking, has_feature) == expected


def test_bump_clears_prerelease_and_build():
    version = SemVersion.parse("1.2.3-rc.1+abc")
    assert str(version.bump(BumpType.PATCH)) == "1.2.4"
    assert str(version.bump(BumpType.MINOR)) == "1.3.0"
    assert str(version.bump(BumpType.MAJOR)) == "2.0.0"


def test_candidates_are_ordered_and_above_from_version():
    from_version = SemVersion.parse("0.4.2")
    candidates = VersionCandidates(from_version, BumpType.MINOR)
    assert candidates.major > candidates.minor > candidates.patch > from_version
    assert candidates.default == candidates.minor
    assert candidates.name("v") == "v0.5.0"
    assert candidates.name("v", BumpType.MAJOR) == "v1.0.0"
    assert list(candidates.all()) == list(BumpType)


def test_default_version_bumps():
    candidates = VersionCandidates(SemVersion.default(), BumpType.PATCH)
    assert SemVersion.default().is_default
    assert str(candidates.default) == "0.0.1"
