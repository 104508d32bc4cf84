"""Linter — subject and commit-range evaluation."""

from commitgate.linter.engine import lint_commits, lint_subject

__all__ = ["lint_commits", "lint_subject"]
