"""Structural parser for conventional-commit subjects.

    subject := type ("(" scope ")")? "!"? ": " description

The description is kept twice: verbatim (``raw_description``) for the
length, full-stop and casing rules, and trimmed (``description``) for the
emptiness rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

FORMAT_MESSAGE = (
    "format must be 'type(scope)?: subject' with lowercase type and a space after colon"
)

SUBJECT_PATTERN = re.compile(
    r"(?P<type>[a-z]+)"
    r"(?:\((?P<scope>[a-z0-9][a-z0-9./-]*?)\))?"
    r"(?P<breaking>!)?"
    r": (?P<description>.*)"
)

# Machine-generated merge subjects, matched against the whole line.
MERGE_PATTERNS = (
    re.compile(r"Merge pull request #\d+ from \S+"),
    re.compile(r"Merge branch '[^']+'(?: of \S+)?(?: into \S+)?"),
    re.compile(r"Merge [0-9a-f]{7,40} into [0-9a-f]{7,40}"),
)


class SubjectFormatError(ValueError):
    """Raised when a subject does not follow the structural grammar."""

    def __init__(self, subject: str) -> None:
        super().__init__(FORMAT_MESSAGE)
        self.subject = subject


@dataclass(frozen=True)
class ParsedSubject:
    type: str
    scope: str
    breaking: bool
    raw_description: str

    @property
    def description(self) -> str:
        return self.raw_description.strip()


def is_merge_subject(subject: str) -> bool:
    """Return True for the merge subjects git and GitHub generate."""
    if not subject.startswith("Merge "):
        return False
    return any(p.fullmatch(subject) for p in MERGE_PATTERNS)


def parse_subject(subject: str) -> ParsedSubject:
    """Decompose *subject*. Raises SubjectFormatError when it does not match."""
    m = SUBJECT_PATTERN.fullmatch(subject)
    if m is None:
        raise SubjectFormatError(subject)
    return ParsedSubject(
        type=m.group("type"),
        scope=m.group("scope") or "",
        breaking=m.group("breaking") is not None,
        raw_description=m.group("description"),
    )
