from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from tag_changelog.versioning.tags import TagIndex
from tag_changelog.versioning.version_bump import (
    BumpType,
    SemVersion,
    VersionCandidates,
    default_bump,
)

logger = logging.getLogger(__name__)
SHORT_SHA_LEN = 7


class BumpInput(Protocol):
    @property
    def from_sha(self) -> str: ...

    @property
    def to_sha(self) -> str: ...

    @property
    def has_breaking(self) -> bool: ...

    @property
    def has_feature(self) -> bool: ...


@dataclass(frozen=True)
class SegmentRelease:
    """Names used in the heading and compare link of a segment.

    `candidates` is only set when the newer boundary is not tagged yet,
    `to_name` is then the default candidate unless a bump was chosen.
    """

    from_name: str
    to_name: str
    candidates: VersionCandidates | None = None
    tag_prefix: str = ""

    @property
    def is_computed(self) -> bool:
        return self.candidates is not None

    def with_bump(self, bump: BumpType) -> SegmentRelease:
        assert self.candidates, f"{self.to_name} is already tagged, cannot bump"
        return SegmentRelease(
            from_name=self.from_name,
            to_name=self.candidates.name(self.tag_prefix, bump),
            candidates=self.candidates,
            tag_prefix=self.tag_prefix,
        )


def segment_release(
    segment: BumpInput, tag_index: TagIndex, tag_prefix: str
) -> SegmentRelease:
    from_name = tag_index.tag_for(segment.from_sha) or segment.from_sha[:SHORT_SHA_LEN]
    if to_tag := tag_index.tag_for(segment.to_sha):
        return SegmentRelease(from_name=from_name, to_name=to_tag)
    from_version = (
        tag_index.version_for(segment.from_sha, tag_prefix) or SemVersion.default()
    )
    candidates = VersionCandidates(
        from_version=from_version,
        default_bump=default_bump(segment.has_breaking, segment.has_feature),
    )
    to_name = candidates.name(tag_prefix)
    logger.info(
        f"next version after {from_name} is {to_name} ({candidates.default_bump})"
    )
    return SegmentRelease(
        from_name=from_name,
        to_name=to_name,
        candidates=candidates,
        tag_prefix=tag_prefix,
    )
