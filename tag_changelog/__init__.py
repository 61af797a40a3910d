from tag_changelog.cli.workflows import ChangelogRun, generate_changelog
from tag_changelog.errors import ChangelogError
from tag_changelog.settings import ChangelogSettings, changelog_settings

VERSION = "0.1.0"
__all__ = [
    "ChangelogError",
    "ChangelogRun",
    "ChangelogSettings",
    "VERSION",
    "changelog_settings",
    "generate_changelog",
]
