from ask_shell._internal.interactive import ChoiceTyped, select_list_choice

from tag_changelog.segments.aggregator import Segment
from tag_changelog.versioning.release import SegmentRelease
from tag_changelog.versioning.version_bump import BumpType


def bump_choices(release: SegmentRelease) -> list[ChoiceTyped[BumpType]]:
    candidates = release.candidates
    assert candidates, f"{release.to_name} is tagged, nothing to choose"
    choices = [
        ChoiceTyped(
            name=f"{bump} -> {release.tag_prefix}{version}",
            value=bump,
            description="default" if bump == candidates.default_bump else "",
        )
        for bump, version in candidates.all().items()
    ]
    # default first so pressing enter keeps it
    return sorted(choices, key=lambda choice: choice.value != candidates.default_bump)


def select_bump(segment: Segment, release: SegmentRelease) -> SegmentRelease:
    prompt_text = f"Choose version for changes after {release.from_name}"
    bump = select_list_choice(
        f"{prompt_text} ({segment.commit_count} commits)",
        bump_choices(release),
        default=release.candidates.default_bump if release.candidates else None,
    )
    if release.candidates and bump == release.candidates.default_bump:
        return release
    return release.with_bump(bump)
