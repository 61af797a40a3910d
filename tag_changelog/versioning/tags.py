from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from tag_changelog.versioning.version_bump import SemVersion, is_semver_tag

logger = logging.getLogger(__name__)


class TagSource(Protocol):
    def list_tags(self) -> list[str]: ...

    def resolve_tag(self, tag_name: str) -> str | None: ...


def is_version_tag(name: str, tag_prefix: str = "") -> bool:
    """
    >>> is_version_tag("v1.0.0")
    True
    >>> is_version_tag("release-1.0.0", tag_prefix="release-")
    True
    >>> is_version_tag("latest")
    False
    """
    if is_semver_tag(name):
        return True
    return bool(tag_prefix) and name.startswith(tag_prefix) and (
        is_semver_tag(name.removeprefix(tag_prefix))
    )


@dataclass
class TagIndex:
    tags: list[str] = field(default_factory=list)
    commit_to_tag: dict[str, str] = field(default_factory=dict)
    tag_to_commit: dict[str, str] = field(default_factory=dict)

    def add(self, tag_name: str, sha: str) -> None:
        self.tags.append(tag_name)
        self.tag_to_commit[tag_name] = sha
        existing = self.commit_to_tag.get(sha)
        if existing is None or tag_name < existing:
            # deterministic tie-break when several tags point to one commit
            self.commit_to_tag[sha] = tag_name

    def tag_for(self, sha: str) -> str | None:
        return self.commit_to_tag.get(sha)

    def is_tagged(self, sha: str) -> bool:
        return sha in self.commit_to_tag

    def commit_for(self, tag_name: str) -> str | None:
        return self.tag_to_commit.get(tag_name)

    def version_for(self, sha: str, tag_prefix: str = "") -> SemVersion | None:
        if tag_name := self.tag_for(sha):
            return SemVersion.parse(tag_name, prefix=tag_prefix)
        return None


def build_tag_index(source: TagSource, tag_prefix: str = "") -> TagIndex:
    index = TagIndex()
    for tag_name in source.list_tags():
        if not is_version_tag(tag_name, tag_prefix):
            logger.debug(f"ignoring non semver tag: {tag_name}")
            continue
        sha = source.resolve_tag(tag_name)
        if sha is None:
            continue
        index.add(tag_name, sha)
    logger.info(f"found {len(index.tags)} version tags")
    return index
