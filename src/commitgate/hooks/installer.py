"""commit-msg hook installer — commitgate install / uninstall."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from commitgate.git.adapter import GitError, get_hooks_dir

HOOK_NAME = "commit-msg"

_HOOK_MARKER = "# commitgate-hook"
_HOOK_SCRIPT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Installed by commitgate
# To uninstall: commitgate uninstall

exec commitgate check "$1"
"""


def _hooks_dir(repo_root: Path) -> Optional[Path]:
    """Resolve the hooks directory as git sees it, or None outside a repository.

    Honours worktrees, submodules and ``core.hooksPath``.
    """
    try:
        return get_hooks_dir(repo_root)
    except GitError:
        return None


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Install commitgate as a commit-msg hook.

    Returns (success, message).
    """
    hooks_dir = _hooks_dir(repo_root)
    if hooks_dir is None:
        return False, f"Not a git repository: {repo_root}"

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / HOOK_NAME

    if hook_path.exists():
        content = hook_path.read_text(encoding="utf-8", errors="replace")
        if _HOOK_MARKER in content:
            return True, "commitgate hook is already installed."
        if not force:
            return (
                False,
                f"A {HOOK_NAME} hook already exists at {hook_path}. "
                "Use --force to overwrite, or manually add 'commitgate check \"$1\"' to it.",
            )

    hook_path.write_text(_HOOK_SCRIPT, encoding="utf-8")
    try:
        hook_path.chmod(0o755)
    except OSError:
        pass  # Windows doesn't need chmod

    return True, f"Installed commitgate {HOOK_NAME} hook at {hook_path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the commitgate commit-msg hook.

    Returns (success, message).
    """
    hooks_dir = _hooks_dir(repo_root)
    if hooks_dir is None:
        return False, f"Not a git repository: {repo_root}"
    hook_path = hooks_dir / HOOK_NAME

    if not hook_path.exists():
        return True, f"No {HOOK_NAME} hook found — nothing to remove."

    content = hook_path.read_text(encoding="utf-8", errors="replace")
    if _HOOK_MARKER not in content:
        return False, f"{HOOK_NAME} hook exists but was not installed by commitgate."

    hook_path.unlink()
    return True, f"Removed commitgate {HOOK_NAME} hook from {hook_path}"
