# Commit classification domain

from .classifier import ParsedSubject, classify, parse_co_authors, parse_subject
from .models import Author, Commit, CommitType, RawCommit

__all__ = [
    "Author",
    "Commit",
    "CommitType",
    "ParsedSubject",
    "RawCommit",
    "classify",
    "parse_co_authors",
    "parse_subject",
]
