"""Git interface layer — adapter and commit models."""

from commitgate.git.adapter import (
    GitError,
    get_commits,
    get_hooks_dir,
    get_repo_root,
    infer_range_from_env,
    parse_log,
)
from commitgate.git.models import Commit, CommitBatch

__all__ = [
    "Commit",
    "CommitBatch",
    "GitError",
    "get_commits",
    "get_hooks_dir",
    "get_repo_root",
    "infer_range_from_env",
    "parse_log",
]
