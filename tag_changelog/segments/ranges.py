from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from tag_changelog.errors import EmptyRangeError
from tag_changelog.versioning.tags import TagIndex

logger = logging.getLogger(__name__)


class RangeGateway(Protocol):
    def resolve_ref(self, name: str) -> str: ...

    def walk(self, rev: str) -> Iterable[str]: ...

    def walk_range(self, from_sha: str, to_sha: str) -> Iterable[str]: ...

    def root(self, rev: str) -> str: ...


@dataclass(frozen=True)
class SegmentBoundary:
    from_sha: str  # older, exclusive
    to_sha: str  # newer, inclusive
    excluded: tuple[str, ...] = ()  # older boundaries, their history is not walked


def resolve_ref(gateway: RangeGateway, tag_index: TagIndex, ref: str) -> str:
    if sha := tag_index.commit_for(ref):
        return sha
    return gateway.resolve_ref(ref)


def resolve_from(
    gateway: RangeGateway, tag_index: TagIndex, from_ref: str | None, to_sha: str
) -> str:
    """Without from_ref: the closest tagged commit walking back from to_sha, or the root commit"""
    if from_ref:
        return resolve_ref(gateway, tag_index, from_ref)
    for sha in gateway.walk(to_sha):
        if tag_name := tag_index.tag_for(sha):
            logger.info(f"using latest tag {tag_name} as from")
            return sha
    root_sha = gateway.root(to_sha)
    logger.info(f"no version tag found, using root commit {root_sha[:7]} as from")
    return root_sha


def resolve_boundaries(
    gateway: RangeGateway,
    tag_index: TagIndex,
    from_ref: str | None,
    to_ref: str,
) -> list[str]:
    """Returns [to, *tagged commits in between (newest first), from]"""
    to_sha = resolve_ref(gateway, tag_index, to_ref)
    from_sha = resolve_from(gateway, tag_index, from_ref, to_sha)
    if from_sha == to_sha:
        raise EmptyRangeError(from_sha, to_sha)
    boundaries = [to_sha]
    for sha in gateway.walk_range(from_sha, to_sha):
        if sha != to_sha and tag_index.is_tagged(sha):
            boundaries.append(sha)
    boundaries.append(from_sha)
    logger.info(f"range split into {len(boundaries) - 1} segment(s)")
    return boundaries


def as_segment_boundaries(boundaries: list[str]) -> list[SegmentBoundary]:
    """Newest first, each segment hides the history of every older boundary

    >>> for boundary in as_segment_boundaries(["c", "b", "a"]):
    ...     print(boundary.to_sha, boundary.from_sha, boundary.excluded)
    c b ('a',)
    b a ()
    """
    assert len(boundaries) >= 2, f"need at least two boundaries, got {boundaries}"
    return [
        SegmentBoundary(
            from_sha=boundaries[i + 1],
            to_sha=boundaries[i],
            excluded=tuple(boundaries[i + 2 :]),
        )
        for i in range(len(boundaries) - 1)
    ]
