"""GitHub Actions workflow-command reporter."""

from __future__ import annotations

from typing import List

from commitgate.findings.models import LintResult

TITLE = "commitlint"


def notice(message: str) -> str:
    return f"::notice title={TITLE}::{message}"


def warning(message: str) -> str:
    return f"::warning title={TITLE}::{message}"


def error(message: str) -> str:
    return f"::error title={TITLE}::{message}"


def render_lines(result: LintResult) -> List[str]:
    """One ``::error`` per violation, then the summary group or success line."""
    lines = [
        f"::error title=commit {v.short_sha}::{v.message} | '{v.subject}'"
        for v in result.violations
    ]
    if result.failed:
        lines.append("::group::Commit lint summary")
        lines.append(
            f"Found {result.total_violations} errors across "
            f"{result.commits_checked} commit(s)."
        )
        lines.append("::endgroup::")
    else:
        lines.append("All commit subjects comply with rules.")
    return lines


def render(result: LintResult) -> str:
    return "\n".join(render_lines(result))
