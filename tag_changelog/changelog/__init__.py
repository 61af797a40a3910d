from .render import (
    TYPE_SECTIONS,
    as_changelog_line,
    as_contributor_line,
    attribution,
    join_names,
    render_changelog,
    render_segment,
)
from .write_changelog_md import (
    add_changelog_section,
    read_changelog_section,
    write_changelog_md,
)

__all__ = [
    "TYPE_SECTIONS",
    "add_changelog_section",
    "as_changelog_line",
    "as_contributor_line",
    "attribution",
    "join_names",
    "read_changelog_section",
    "render_changelog",
    "render_segment",
    "write_changelog_md",
]
