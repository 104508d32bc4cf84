"""Git subprocess wrapper — repo root, commit log, CI range inference."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from commitgate.git.models import Commit, CommitBatch

_LOG_FORMAT = "--pretty=format:%H%x00%s"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error.

    ``fallback_reason`` is set when the error came from the HEAD fallback in
    :func:`get_commits`, and holds the failure of the original range query.
    """

    def __init__(self, message: str, fallback_reason: Optional[str] = None):
        super().__init__(message)
        self.fallback_reason = fallback_reason


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from (worktree and core.hooksPath aware)."""
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root)
    hooks_dir = Path(out.strip())
    if not hooks_dir.is_absolute():
        hooks_dir = repo_root / hooks_dir
    return hooks_dir


def parse_log(output: str) -> List[Commit]:
    """Parse ``%H%x00%s`` lines into commits, skipping blank or malformed lines."""
    commits: List[Commit] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\x00", 1)
        if len(parts) == 2:
            commits.append(Commit(sha=parts[0].strip(), subject=parts[1].strip()))
    return commits


def _log(repo_root: Path, range_spec: Optional[str], limit: int) -> List[Commit]:
    args = ["log", "--no-merges", _LOG_FORMAT]
    if range_spec:
        args.append(range_spec)
    if limit > 0:
        args.extend(["-n", str(limit)])
    return parse_log(_run_git(args, cwd=repo_root))


def get_commits(
    repo_root: Path,
    range_spec: Optional[str] = None,
    limit: int = 200,
) -> CommitBatch:
    """Return non-merge commits in *range_spec*, newest first.

    If the range cannot be read, the most recent commit is fetched instead.
    A failure of that second query raises GitError carrying the first
    failure as ``fallback_reason``.
    """
    try:
        return CommitBatch(commits=_log(repo_root, range_spec, limit), range_spec=range_spec)
    except GitError as exc:
        first = exc
    reason = str(first)

    try:
        commits = _log(repo_root, None, 1)
    except GitError as exc:
        raise GitError(str(exc), fallback_reason=reason) from first
    return CommitBatch(
        commits=commits,
        range_spec=range_spec,
        fell_back=True,
        fallback_reason=reason,
    )


def infer_range_from_env(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Derive a range from GitHub pull-request context, or None for the default."""
    env = os.environ if env is None else env
    event_name = env.get("GITHUB_EVENT_NAME", "")
    base_ref = env.get("GITHUB_BASE_REF", "")
    if event_name.startswith("pull_request") and base_ref:
        return f"origin/{base_ref}..HEAD"
    return None
