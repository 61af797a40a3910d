import logging
import re
from pathlib import Path

from zero_3rdparty.file_utils import ensure_parents_write_text

logger = logging.getLogger(__name__)
_header_regex = re.compile(r"^(?P<hashes>#{2,5})\s", re.M)
CHANGELOG_TITLE = "# Changelog\n\n"


def _version_header_regex(version: str) -> re.Pattern:
    return re.compile(_header_regex.pattern + re.escape(version) + r"\s*$", re.M)


def add_changelog_section(old_content: str, new_section: str, version: str) -> str:
    """Replaces the section of `version` when present, otherwise inserts before the first section"""
    new_section = new_section.rstrip("\n") + "\n"
    if existing := _version_header_regex(version).search(old_content):
        hash_count = len(existing["hashes"])
        start_index = existing.start()
        for end_match in _header_regex.finditer(old_content, existing.end()):
            if len(end_match["hashes"]) != hash_count:
                continue
            return old_content[:start_index] + new_section + "\n" + old_content[
                end_match.start() :
            ]
        # no end match, this is the last header section
        return old_content[:start_index] + new_section
    insert_point = next(
        (header_match.start() for header_match in _header_regex.finditer(old_content)),
        None,
    )
    if insert_point is not None:
        return (
            old_content[:insert_point] + new_section + "\n" + old_content[insert_point:]
        )
    if not old_content.strip():
        return CHANGELOG_TITLE + new_section
    return old_content.rstrip("\n") + "\n\n" + new_section


def read_changelog_section(changelog_content: str, version: str) -> str:
    header_match = _version_header_regex(version).search(changelog_content)
    if header_match is None:
        raise ValueError(f"unable to find {version} in changelog")
    hash_count = len(header_match["hashes"])
    for end_match in _header_regex.finditer(changelog_content, header_match.end()):
        if len(end_match["hashes"]) == hash_count:
            return changelog_content[header_match.start() : end_match.start()].strip()
    return changelog_content[header_match.start() :].strip()


def write_changelog_md(path: Path, markdown: str, version: str) -> None:
    old_content = path.read_text() if path.exists() else ""
    new_content = add_changelog_section(old_content, markdown, version)
    ensure_parents_write_text(path, new_content)
    logger.info(f"wrote section {version} to {path}")
