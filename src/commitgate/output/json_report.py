"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from commitgate.findings.aggregator import group_by_commit
from commitgate.findings.models import LintResult


def to_dict(result: LintResult) -> Dict[str, Any]:
    """Convert LintResult to a JSON-serialisable dict."""
    commits_list: List[Dict[str, Any]] = []
    for sha, violations in group_by_commit(result.violations).items():
        commits_list.append({
            "sha": sha,
            "short_sha": violations[0].short_sha,
            "subject": violations[0].subject,
            "errors": [v.message for v in violations],
        })

    return {
        "version": "1.0",
        **({"range": result.range_spec} if result.range_spec else {}),
        "commits_checked": result.commits_checked,
        "merges_skipped": result.merges_skipped,
        "total_violations": result.total_violations,
        "failed": result.failed,
        "commits": commits_list,
        "lint_duration_ms": result.lint_duration_ms,
    }


def render(result: LintResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
