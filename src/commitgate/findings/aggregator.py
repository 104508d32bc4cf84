"""Violation grouping for reporters."""

from __future__ import annotations

from typing import Dict, List

from commitgate.findings.models import Violation


def group_by_commit(violations: List[Violation]) -> Dict[str, List[Violation]]:
    """Group violations by commit sha, keeping first-seen commit order."""
    grouped: Dict[str, List[Violation]] = {}
    for v in violations:
        grouped.setdefault(v.sha, []).append(v)
    return grouped
