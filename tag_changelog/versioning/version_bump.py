from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from functools import total_ordering
from typing import Callable

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
# with the optional v/ver tag prefix
semver_pattern_str = (
    r"^(?P<prefix>v|ver)?"
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_semver_regex = re.compile(semver_pattern_str)


def is_semver_tag(name: str) -> bool:
    """
    >>> is_semver_tag("v1.2.3-rc.1+build.5")
    True
    >>> is_semver_tag("ver0.1.0")
    True
    >>> is_semver_tag("1.02.3")
    False
    >>> is_semver_tag("release-1")
    False
    """
    return _semver_regex.match(name) is not None


class BumpType(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def _prerelease_key(prerelease: str) -> tuple:
    # numeric identifiers have lower precedence than alphanumeric ones
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in prerelease.split(".")
    )


@total_ordering
@dataclass(frozen=True)
class SemVersion:
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @classmethod
    def default(cls) -> SemVersion:
        return cls(0, 0, 0)

    @classmethod
    def parse(cls, raw: str, prefix: str = "") -> SemVersion:
        """
        >>> SemVersion.parse("v1.2.3-rc.1", prefix="v")
        SemVersion(major=1, minor=2, patch=3, prerelease='rc.1', build='')
        """
        version_match = _semver_regex.match(raw.removeprefix(prefix))
        if version_match is None:
            version_match = _semver_regex.match(raw)
        if version_match is None:
            raise ValueError(f"Invalid version string: {raw}")
        return cls(
            int(version_match["major"]),
            int(version_match["minor"]),
            int(version_match["patch"]),
            version_match["prerelease"] or "",
            version_match["buildmetadata"] or "",
        )

    def bump_major(self) -> SemVersion:
        return SemVersion(self.major + 1, 0, 0)

    def bump_minor(self) -> SemVersion:
        return SemVersion(self.major, self.minor + 1, 0)

    def bump_patch(self) -> SemVersion:
        return SemVersion(self.major, self.minor, self.patch + 1)

    def bump(self, bump_type: BumpType) -> SemVersion:
        return _bumps[bump_type](self)

    @property
    def is_default(self) -> bool:
        return self == self.default()

    def _precedence_key(self) -> tuple:
        # a version without pre-release has higher precedence than one with
        core = (self.major, self.minor, self.patch)
        if self.prerelease:
            return (*core, 0, _prerelease_key(self.prerelease))
        return (*core, 1, ())

    def __lt__(self, other) -> bool:
        if not isinstance(other, SemVersion):
            raise TypeError
        return self._precedence_key() < other._precedence_key()

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version


_bumps: dict[BumpType, Callable[[SemVersion], SemVersion]] = {
    BumpType.MAJOR: SemVersion.bump_major,
    BumpType.MINOR: SemVersion.bump_minor,
    BumpType.PATCH: SemVersion.bump_patch,
}
# use compile time error if a BumpType is added without a bump method
_missing_bumps = [bump for bump in list(BumpType) if bump not in _bumps]
assert not _missing_bumps, f"missing BumpType found for SemVersion: {_missing_bumps}"


def default_bump(has_breaking: bool, has_feature: bool) -> BumpType:
    if has_breaking:
        return BumpType.MAJOR
    if has_feature:
        return BumpType.MINOR
    return BumpType.PATCH


@dataclass(frozen=True)
class VersionCandidates:
    from_version: SemVersion
    default_bump: BumpType

    @property
    def major(self) -> SemVersion:
        return self.from_version.bump(BumpType.MAJOR)

    @property
    def minor(self) -> SemVersion:
        return self.from_version.bump(BumpType.MINOR)

    @property
    def patch(self) -> SemVersion:
        return self.from_version.bump(BumpType.PATCH)

    @property
    def default(self) -> SemVersion:
        return self.from_version.bump(self.default_bump)

    def all(self) -> dict[BumpType, SemVersion]:
        return {bump: self.from_version.bump(bump) for bump in BumpType}

    def name(self, prefix: str, bump: BumpType | None = None) -> str:
        version = self.from_version.bump(bump or self.default_bump)
        return f"{prefix}{version}"
