"""Violation models and aggregation."""

from commitgate.findings.aggregator import group_by_commit
from commitgate.findings.models import LintResult, Violation

__all__ = ["LintResult", "Violation", "group_by_commit"]
