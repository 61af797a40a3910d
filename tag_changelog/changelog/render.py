from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from tag_changelog.commits.models import Author, Commit, CommitType
from tag_changelog.segments.aggregator import Segment
from tag_changelog.versioning.release import SegmentRelease

_issue_ref_regex = re.compile(r"#\d+")


@dataclass(frozen=True)
class SectionSpec:
    title: str
    emoji: str

    def heading(self, use_emoji: bool) -> str:
        if use_emoji:
            return f"{self.emoji} {self.title}"
        return self.title


BREAKING_SECTION = SectionSpec("Breaking Changes", ":sparkles:")
CONTRIBUTORS_SECTION = SectionSpec("Contributors", ":busts_in_silhouette:")
TYPE_SECTIONS: dict[CommitType, SectionSpec] = {
    CommitType.FEAT: SectionSpec("Features", ":sparkles:"),
    CommitType.FIX: SectionSpec("Bug Fixes", ":bug:"),
    CommitType.DOCS: SectionSpec("Documentation", ":memo:"),
    CommitType.STYLE: SectionSpec("Styles", ":art:"),
    CommitType.REFACTOR: SectionSpec("Code Refactoring", ":recycle:"),
    CommitType.PERF: SectionSpec("Performance Improvements", ":zap:"),
    CommitType.TEST: SectionSpec("Tests", ":rotating_light:"),
    CommitType.BUILD: SectionSpec("Build", ":hammer:"),
    CommitType.CI: SectionSpec("Continuous Integration", ":green_heart:"),
    CommitType.CHORE: SectionSpec("Chores", ":wrench:"),
    CommitType.REVERT: SectionSpec("Reverts", ":rewind:"),
    CommitType.OTHER: SectionSpec("Others", ":package:"),
}
_missing_sections = [t for t in list(CommitType) if t not in TYPE_SECTIONS]
assert not _missing_sections, f"missing section for CommitType: {_missing_sections}"


def join_names(names: list[str]) -> str:
    """
    >>> join_names(["a"])
    'a'
    >>> join_names(["a", "b"])
    'a and b'
    >>> join_names(["a", "b", "c"])
    'a, b, and c'
    """
    match names:
        case []:
            return ""
        case [single]:
            return single
        case [first, second]:
            return f"{first} and {second}"
    return f"{', '.join(names[:-1])}, and {names[-1]}"


def attribution(authors: Iterable[Author]) -> str:
    return f"by {join_names([author.display_name for author in authors])}"


def _commit_ref(commit: Commit, base_url: str) -> str:
    if _issue_ref_regex.search(commit.description):
        return ""
    sha = commit.short_hash
    if base_url:
        return f" ([{sha}]({base_url}/commit/{commit.hash}))"
    return f" ({sha})"


def as_changelog_line(commit: Commit, base_url: str) -> str:
    scope = f"**{commit.scope}** " if commit.scope else ""
    ref = _commit_ref(commit, base_url)
    return f"- {scope}{commit.description}{ref} - {attribution(commit.authors)}"


def as_contributor_line(author: Author) -> str:
    if author.handle:
        return f"- {author.name} (@{author.handle})"
    return f"- {author.name} <{author.mail}>"


def compare_url(base_url: str, release: SegmentRelease) -> str:
    return f"{base_url}/compare/{release.from_name}...{release.to_name}"


def _section(spec: SectionSpec, lines: list[str], use_emoji: bool) -> str:
    body = "\n".join(lines)
    return f"\n### {spec.heading(use_emoji)}\n\n{body}\n"


def render_segment(
    segment: Segment,
    release: SegmentRelease,
    base_url: str = "",
    *,
    use_emoji: bool = True,
) -> str:
    """Markdown for one segment, sections without commits are left out"""
    parts = [f"## {release.to_name}\n\n"]
    if base_url:
        parts.append(f"[compare changes]({compare_url(base_url, release)})\n")
    if breaking := segment.breaking_commits():
        lines = [as_changelog_line(commit, base_url) for commit in breaking]
        parts.append(_section(BREAKING_SECTION, lines, use_emoji))
    for commit_type, spec in TYPE_SECTIONS.items():
        commits = segment.commits_by_type.get(commit_type, [])
        if lines := [
            as_changelog_line(commit, base_url)
            for commit in commits
            if not commit.is_breaking
        ]:
            parts.append(_section(spec, lines, use_emoji))
    if segment.contributors:
        lines = [as_contributor_line(a) for a in segment.contributors.values()]
        parts.append(_section(CONTRIBUTORS_SECTION, lines, use_emoji))
    return "".join(parts)


def render_changelog(
    rendered: list[tuple[Segment, SegmentRelease]],
    base_url: str = "",
    *,
    use_emoji: bool = True,
) -> str:
    return "\n".join(
        render_segment(segment, release, base_url, use_emoji=use_emoji)
        for segment, release in rendered
    )
