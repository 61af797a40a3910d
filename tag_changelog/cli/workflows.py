from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from model_lib.model_base import Entity
from pydantic import Field

from tag_changelog.changelog.render import render_changelog, render_segment
from tag_changelog.changelog.write_changelog_md import write_changelog_md
from tag_changelog.errors import RemoteURLNotFound
from tag_changelog.git_usage.gateway import RepoGateway
from tag_changelog.git_usage.github import (
    GhCommitHistory,
    GhUserLookup,
    fetch_remote_history,
    gh_available,
)
from tag_changelog.git_usage.url import RemoteRepo, parse_remote_url
from tag_changelog.segments.aggregator import Segment, aggregate_segments
from tag_changelog.segments.identity import IdentityLookup, IdentityResolver
from tag_changelog.segments.ranges import as_segment_boundaries, resolve_boundaries
from tag_changelog.settings import ChangelogSettings
from tag_changelog.versioning.release import SegmentRelease, segment_release
from tag_changelog.versioning.tags import build_tag_index

logger = logging.getLogger(__name__)
BumpSelector = Callable[[Segment, SegmentRelease], SegmentRelease]


class NextVersionInfo(Entity):
    from_name: str
    to_name: str
    is_tagged: bool
    default_bump: str = ""
    candidates: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_release(cls, release: SegmentRelease) -> NextVersionInfo:
        if candidates := release.candidates:
            return cls(
                from_name=release.from_name,
                to_name=release.to_name,
                is_tagged=False,
                default_bump=str(candidates.default_bump),
                candidates={
                    str(bump): f"{release.tag_prefix}{version}"
                    for bump, version in candidates.all().items()
                },
            )
        return cls(from_name=release.from_name, to_name=release.to_name, is_tagged=True)


@dataclass
class ChangelogRun:
    segments: list[Segment]
    releases: list[SegmentRelease]
    base_url: str = ""
    use_emoji: bool = True
    lookup_count: int = field(default=0, compare=False)

    @property
    def pairs(self) -> list[tuple[Segment, SegmentRelease]]:
        return list(zip(self.segments, self.releases))

    @property
    def markdown(self) -> str:
        return render_changelog(self.pairs, self.base_url, use_emoji=self.use_emoji)

    @property
    def newest_release(self) -> SegmentRelease:
        return self.releases[0]

    def write(self, settings: ChangelogSettings) -> None:
        # oldest first so each newer section is inserted above the previous one
        for segment, release in reversed(self.pairs):
            section = render_segment(
                segment, release, self.base_url, use_emoji=self.use_emoji
            )
            write_changelog_md(settings.changelog_md, section, release.to_name)


def find_remote(gateway: RepoGateway, remote_name: str) -> RemoteRepo | None:
    try:
        url = gateway.remote_url(remote_name)
    except RemoteURLNotFound as e:
        logger.warning(f"no compare links: {e}")
        return None
    if remote := parse_remote_url(url):
        return remote
    logger.warning(f"unable to parse remote url, no compare links: {url}")
    return None


def _default_lookup(
    settings: ChangelogSettings, remote: RemoteRepo | None
) -> IdentityLookup | None:
    if not settings.lookup_handles:
        return None
    if remote is None or not remote.is_github:
        logger.info("handle lookup only supported for GitHub remotes")
        return None
    if not gh_available():
        logger.warning("gh cli not found, handles will not be looked up")
        return None
    return GhUserLookup(cwd=settings.repo_path)


def _default_history(
    settings: ChangelogSettings, remote: RemoteRepo | None
) -> GhCommitHistory | None:
    if not settings.use_remote_history or remote is None or not remote.is_github:
        return None
    if not gh_available():
        return None
    return GhCommitHistory(remote=remote, cwd=settings.repo_path)


def generate_changelog(
    settings: ChangelogSettings,
    *,
    gateway: RepoGateway | None = None,
    lookup: IdentityLookup | None = None,
    history: GhCommitHistory | None = None,
    bump_selector: BumpSelector | None = None,
) -> ChangelogRun:
    gateway = gateway or RepoGateway.open(settings.repo_path)
    remote = find_remote(gateway, settings.remote_name)
    tag_index = build_tag_index(gateway, settings.tag_prefix)
    boundaries = resolve_boundaries(
        gateway, tag_index, settings.from_ref, settings.to_ref
    )
    resolver = IdentityResolver(lookup=lookup or _default_lookup(settings, remote))
    if history := history or _default_history(settings, remote):
        for raw in fetch_remote_history(history, boundaries[0], boundaries[-1]):
            resolver.remember_all(raw.known_handles())
    segments = aggregate_segments(
        gateway, as_segment_boundaries(boundaries), resolver
    )
    releases = []
    for segment in segments:
        release = segment_release(segment, tag_index, settings.tag_prefix)
        if bump_selector and release.is_computed:
            release = bump_selector(segment, release)
        releases.append(release)
    return ChangelogRun(
        segments=segments,
        releases=releases,
        base_url=remote.web_url if remote else "",
        use_emoji=settings.use_emoji,
        lookup_count=resolver.lookup_count,
    )
