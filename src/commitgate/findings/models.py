"""Violation and lint-result data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Violation:
    """One failed rule for one commit."""

    sha: str
    subject: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass
class LintResult:
    """Complete result of a lint run."""

    violations: List[Violation] = field(default_factory=list)
    commits_checked: int = 0
    merges_skipped: int = 0
    range_spec: Optional[str] = None
    lint_duration_ms: float = 0.0

    @property
    def total_violations(self) -> int:
        return len(self.violations)

    @property
    def failed(self) -> bool:
        return bool(self.violations)

    @property
    def failing_commits(self) -> int:
        return len({v.sha for v in self.violations})
