from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, model_validator


class CommitType(StrEnum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"
    OTHER = "other"

    @classmethod
    def bucket(cls, type_token: str) -> CommitType:
        """
        >>> CommitType.bucket("feat")
        <CommitType.FEAT: 'feat'>
        >>> CommitType.bucket("wip")
        <CommitType.OTHER: 'other'>
        """
        try:
            return cls(type_token)
        except ValueError:
            return cls.OTHER


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    mail: str
    handle: str = ""

    @property
    def display_name(self) -> str:
        return f"@{self.handle}" if self.handle else self.name

    def with_handle(self, handle: str) -> Author:
        return self.model_copy(update={"handle": handle})


class RawCommit(BaseModel):
    """Commit metadata as read from a repository gateway or a remote history page"""

    model_config = ConfigDict(frozen=True)

    sha: str
    subject: str
    body: str = ""
    author_name: str
    author_mail: str
    author_handle: str = ""
    committer_name: str = ""
    committer_mail: str = ""
    committer_handle: str = ""

    @classmethod
    def from_message(cls, sha: str, message: str, **kwargs) -> RawCommit:
        subject, _, body = message.strip().partition("\n")
        return cls(sha=sha, subject=subject.strip(), body=body.strip(), **kwargs)

    @property
    def author(self) -> Author:
        return Author(
            name=self.author_name, mail=self.author_mail, handle=self.author_handle
        )

    def known_handles(self) -> dict[str, str]:
        handles = {}
        if self.committer_mail and self.committer_handle:
            handles[self.committer_mail] = self.committer_handle
        if self.author_mail and self.author_handle:
            handles[self.author_mail] = self.author_handle
        return handles


class Commit(BaseModel):
    SHORT_HASH_LEN: ClassVar[int] = 7
    model_config = ConfigDict(frozen=True)

    hash: str
    type: str
    description: str
    scope: str = ""
    emoji: str = ""
    is_breaking: bool = False
    authors: tuple[Author, ...]

    @model_validator(mode="after")
    def check_authors(self) -> Self:
        assert self.authors, f"commit {self.hash} must have at least one author"
        return self

    @property
    def short_hash(self) -> str:
        return self.hash[: self.SHORT_HASH_LEN]

    @property
    def bucket(self) -> CommitType:
        return CommitType.bucket(self.type)

    @property
    def subject(self) -> str:
        scope = f"({self.scope})" if self.scope else ""
        breaking = "!" if self.is_breaking else ""
        return f"{self.type}{scope}{breaking}: {self.description}"

    def with_authors(self, authors: tuple[Author, ...]) -> Commit:
        return self.model_copy(update={"authors": authors})
