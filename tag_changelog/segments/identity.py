from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from tag_changelog.commits.models import Author
from tag_changelog.errors import IdentityLookupError

logger = logging.getLogger(__name__)


class IdentityLookup(Protocol):
    def find_handle(self, mail: str) -> str | None: ...


@dataclass
class IdentityResolver:
    """Resolves handles once per mail for the lifetime of a run.

    Handles already present on commit metadata are remembered and win over a lookup.
    A failed or empty lookup is cached as "" so it is never repeated.
    """

    lookup: IdentityLookup | None = None
    _handles: dict[str, str] = field(default_factory=dict)
    lookup_count: int = 0

    def remember(self, mail: str, handle: str) -> None:
        if handle and not self._handles.get(mail):
            self._handles[mail] = handle

    def remember_all(self, handles: dict[str, str]) -> None:
        for mail, handle in handles.items():
            self.remember(mail, handle)

    def find_handle(self, mail: str) -> str:
        if (handle := self._handles.get(mail)) is not None:
            return handle
        handle = ""
        if self.lookup is not None and mail:
            self.lookup_count += 1
            try:
                handle = self.lookup.find_handle(mail) or ""
            except IdentityLookupError as e:
                logger.warning(repr(e))
        self._handles[mail] = handle
        return handle

    def resolve(self, author: Author) -> Author:
        if author.handle:
            self.remember(author.mail, author.handle)
            return author
        if handle := self.find_handle(author.mail):
            return author.with_handle(handle)
        return author
