from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from tag_changelog.commits.classifier import classify
from tag_changelog.commits.models import Author, Commit, CommitType, RawCommit
from tag_changelog.segments.identity import IdentityResolver
from tag_changelog.segments.ranges import SegmentBoundary

logger = logging.getLogger(__name__)


class CommitSource(Protocol):
    def iter_raw_commits(
        self, from_sha: str, to_sha: str, excluded: Sequence[str] = ()
    ) -> Iterable[RawCommit]: ...


@dataclass
class Segment:
    """Classified commits of to_sha not reachable from from_sha or older boundaries.

    Commits keep the reverse-chronological order of the walk inside each bucket.
    Contributors are keyed by mail in order of first appearance.
    """

    from_sha: str
    to_sha: str
    commits_by_type: dict[CommitType, list[Commit]] = field(default_factory=dict)
    contributors: dict[str, Author] = field(default_factory=dict)
    has_breaking: bool = False

    @property
    def has_feature(self) -> bool:
        return bool(self.commits_by_type.get(CommitType.FEAT))

    @property
    def commit_count(self) -> int:
        return sum(len(commits) for commits in self.commits_by_type.values())

    def commits(self) -> list[Commit]:
        """All commits ordered by bucket"""
        return [
            commit
            for commit_type in CommitType
            for commit in self.commits_by_type.get(commit_type, [])
        ]

    def breaking_commits(self) -> list[Commit]:
        return [commit for commit in self.commits() if commit.is_breaking]

    def add_commit(self, commit: Commit) -> None:
        self.commits_by_type.setdefault(commit.bucket, []).append(commit)
        if commit.is_breaking:
            self.has_breaking = True
        for author in commit.authors:
            self.add_contributor(author)

    def add_contributor(self, author: Author) -> None:
        existing = self.contributors.get(author.mail)
        if existing is None:
            self.contributors[author.mail] = author
        elif author.handle and not existing.handle:
            self.contributors[author.mail] = existing.with_handle(author.handle)


def aggregate_segment(
    source: CommitSource,
    boundary: SegmentBoundary,
    resolver: IdentityResolver,
) -> Segment:
    segment = Segment(from_sha=boundary.from_sha, to_sha=boundary.to_sha)
    skipped = 0
    for raw in source.iter_raw_commits(
        boundary.from_sha, boundary.to_sha, boundary.excluded
    ):
        resolver.remember_all(raw.known_handles())
        commit = classify(raw)
        if commit is None:
            skipped += 1
            continue
        authors = tuple(resolver.resolve(author) for author in commit.authors)
        segment.add_commit(commit.with_authors(authors))
    if skipped:
        logger.info(
            f"skipped {skipped} non conventional commit(s) in {boundary.to_sha[:7]}"
        )
    return segment


def aggregate_segments(
    source: CommitSource,
    boundaries: list[SegmentBoundary],
    resolver: IdentityResolver,
) -> list[Segment]:
    """Newest segment first, same order as the boundaries"""
    return [aggregate_segment(source, boundary, resolver) for boundary in boundaries]
