"""Shared test fixtures — clean environment, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from tests.helpers import git

_ENV_VARS = (
    "TYPES",
    "SCOPES",
    "REQUIRE_SCOPE",
    "REQUIRE_SCOPE_EXCEPT_TYPES",
    "ALLOW_CAPITAL_SUBJECT",
    "MAX_SUBJECT",
    "SKIP_FOR_BOT",
    "CI",
    "GITHUB_ACTOR",
    "GITHUB_EVENT_NAME",
    "GITHUB_BASE_REF",
    "CI_COMMITGATE_FORMAT",
    "CI_COMMITGATE_DISABLE_RULES",
    "CI_COMMITGATE_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests run as on a developer machine unless they opt in."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one conforming commit."""
    subprocess.run(["git", "init", "-q", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "chore: initial commit")
    return tmp_path


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A git repository with no commits yet."""
    subprocess.run(["git", "init", "-q", str(tmp_path)], capture_output=True, check=True)
    return tmp_path
