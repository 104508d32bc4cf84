"""Core lint engine — one subject in, ordered violation messages out."""

from __future__ import annotations

import time
from typing import Iterable, List, Optional

from commitgate.config.schema import CommitGateConfig, LintConfig
from commitgate.findings.models import LintResult, Violation
from commitgate.git.models import Commit
from commitgate.rules.parser import SubjectFormatError, is_merge_subject, parse_subject
from commitgate.rules.registry import RuleRegistry, build_registry


def lint_subject(
    subject: str,
    config: LintConfig,
    registry: Optional[RuleRegistry] = None,
) -> List[str]:
    """Return the violations for *subject*; an empty list means compliant.

    Merge subjects pass unconditionally. A subject outside the grammar yields
    the single format message and no other rule runs.
    """
    if is_merge_subject(subject):
        return []

    try:
        parsed = parse_subject(subject)
    except SubjectFormatError as exc:
        return [str(exc)]

    if registry is None:
        registry = build_registry(CommitGateConfig(lint=config))

    errors: List[str] = []
    for rule in registry.enabled_rules():
        message = rule.evaluate(parsed, config)
        if message is not None:
            errors.append(message)
    return errors


def lint_commits(
    commits: Iterable[Commit],
    config: LintConfig,
    registry: RuleRegistry,
    *,
    range_spec: Optional[str] = None,
) -> LintResult:
    """Lint every commit in order and collect all violations."""
    start = time.perf_counter()

    violations: List[Violation] = []
    checked = 0
    merges = 0
    for commit in commits:
        checked += 1
        if is_merge_subject(commit.subject):
            merges += 1
            continue
        for message in lint_subject(commit.subject, config, registry):
            violations.append(Violation(sha=commit.sha, subject=commit.subject, message=message))

    elapsed = (time.perf_counter() - start) * 1000

    return LintResult(
        violations=violations,
        commits_checked=checked,
        merges_skipped=merges,
        range_spec=range_spec,
        lint_duration_ms=round(elapsed, 2),
    )
