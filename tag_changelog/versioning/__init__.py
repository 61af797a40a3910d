# Versioning domain

from .release import BumpInput, SegmentRelease, segment_release
from .tags import TagIndex, TagSource, build_tag_index, is_version_tag
from .version_bump import (
    BumpType,
    SemVersion,
    VersionCandidates,
    default_bump,
    is_semver_tag,
)

__all__ = [
    "BumpInput",
    "BumpType",
    "SegmentRelease",
    "SemVersion",
    "TagIndex",
    "TagSource",
    "VersionCandidates",
    "build_tag_index",
    "default_bump",
    "is_semver_tag",
    "is_version_tag",
    "segment_release",
]
