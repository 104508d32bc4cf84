"""Git helpers shared by fixtures and tests."""

from __future__ import annotations

import subprocess
from pathlib import Path


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout


def commit(repo: Path, subject: str) -> str:
    """Create an empty commit and return its sha."""
    git(repo, "commit", "--allow-empty", "-q", "-m", subject)
    return git(repo, "rev-parse", "HEAD").strip()
