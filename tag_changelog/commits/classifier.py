"""Conventional commit parsing.

A subject is read with a small scanner instead of one large pattern:

    [emoji] <type>[(<scope>)][!]: <description>

`parse_subject` returns `None` when the subject does not follow the grammar,
callers treat that as "skip this commit".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tag_changelog.commits.models import Author, Commit, RawCommit

logger = logging.getLogger(__name__)
_co_authored_by_regex = re.compile(
    r"^\s*Co-authored-by:\s*(?P<name>.+?)\s*<(?P<mail>[^<>]+)>\s*$", re.I
)
_SHORTCODE_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789_+-")


@dataclass(frozen=True)
class ParsedSubject:
    type: str
    description: str
    scope: str = ""
    emoji: str = ""
    is_breaking: bool = False


class _SubjectScanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    @property
    def done(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.done else self.text[self.pos]

    def accept(self, char: str) -> bool:
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def skip_spaces(self) -> None:
        while self.peek() == " ":
            self.pos += 1

    def take_while(self, predicate) -> str:
        start = self.pos
        while not self.done and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def take_until(self, char: str) -> str | None:
        end = self.text.find(char, self.pos)
        if end == -1:
            return None
        value = self.text[self.pos : end]
        self.pos = end + 1
        return value

    def rest(self) -> str:
        value = self.text[self.pos :]
        self.pos = len(self.text)
        return value

    def emoji(self) -> str:
        if self.peek() == ":":
            end = self.text.find(":", self.pos + 1)
            name = self.text[self.pos + 1 : end] if end != -1 else ""
            if name and all(char in _SHORTCODE_CHARS for char in name):
                self.pos = end + 1
                return f":{name}:"
            return ""
        return self.take_while(lambda char: not char.isascii())


def _is_type_char(char: str) -> bool:
    return "a" <= char <= "z"


def parse_subject(subject: str) -> ParsedSubject | None:
    """
    >>> parse_subject("feat(api)!: drop v1 endpoints")
    ParsedSubject(type='feat', description='drop v1 endpoints', scope='api', emoji='', is_breaking=True)
    >>> parse_subject(":bug: fix: handle a: b") is not None
    True
    >>> parse_subject("oops I forgot the prefix") is None
    True
    """
    scanner = _SubjectScanner(subject.strip())
    emoji = scanner.emoji()
    scanner.skip_spaces()
    commit_type = scanner.take_while(_is_type_char)
    if not commit_type:
        return None
    scope = ""
    if scanner.accept("("):
        scope_or_none = scanner.take_until(")")
        if scope_or_none is None or not scope_or_none.strip():
            return None
        scope = scope_or_none.strip()
    is_breaking = scanner.accept("!")
    if not scanner.accept(":") or not scanner.accept(" "):
        return None
    description = scanner.rest().strip()
    if not description:
        return None
    return ParsedSubject(
        type=commit_type,
        description=description,
        scope=scope,
        emoji=emoji,
        is_breaking=is_breaking,
    )


def parse_co_authors(body: str) -> list[Author]:
    """
    >>> parse_co_authors("text\\n\\nCo-authored-by: Jane Doe <jane@example.com>")
    [Author(name='Jane Doe', mail='jane@example.com', handle='')]
    """
    authors: list[Author] = []
    for line in body.splitlines():
        if match := _co_authored_by_regex.match(line):
            authors.append(Author(name=match["name"], mail=match["mail"].strip()))
    return authors


def classify(raw: RawCommit) -> Commit | None:
    parsed = parse_subject(raw.subject)
    if parsed is None:
        logger.debug(f"skipping unclassified commit {raw.sha[:7]}: {raw.subject}")
        return None
    authors = (raw.author, *parse_co_authors(raw.body))
    return Commit(
        hash=raw.sha,
        type=parsed.type,
        description=parsed.description,
        scope=parsed.scope,
        emoji=parsed.emoji,
        is_breaking=parsed.is_breaking,
        authors=authors,
    )
