"""Data models for commit history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit as returned by ``git log``."""

    sha: str
    subject: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class CommitBatch:
    """Commits fetched for one run, plus how they were obtained."""

    commits: List[Commit] = field(default_factory=list)
    range_spec: Optional[str] = None
    fell_back: bool = False  # range query failed, HEAD only
    fallback_reason: Optional[str] = None

    def __len__(self) -> int:
        return len(self.commits)
