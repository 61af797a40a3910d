from .aggregator import CommitSource, Segment, aggregate_segment, aggregate_segments
from .identity import IdentityLookup, IdentityResolver
from .ranges import (
    RangeGateway,
    SegmentBoundary,
    as_segment_boundaries,
    resolve_boundaries,
    resolve_from,
)

__all__ = [
    "CommitSource",
    "IdentityLookup",
    "IdentityResolver",
    "RangeGateway",
    "Segment",
    "SegmentBoundary",
    "aggregate_segment",
    "aggregate_segments",
    "as_segment_boundaries",
    "resolve_boundaries",
    "resolve_from",
]
