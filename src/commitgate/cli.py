"""commitgate CLI — Typer application with lint, check, install, and init commands."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from commitgate import __version__

app = typer.Typer(
    name="commitgate",
    help="Lint commit subjects against a conventional-commits convention.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_FORMATS = ("terminal", "json", "github")


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from commitgate.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(repo_root: Path, config: Optional[str]):
    from commitgate.config.loader import ConfigError, load_config

    try:
        return load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _build_rules(cfg, repo_root: Optional[Path]):
    from commitgate.rules.registry import RuleLoadError, build_registry

    try:
        return build_registry(cfg, repo_root)
    except RuleLoadError as exc:
        console.print(f"[bold red]Rule error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _report(fmt: str, level: str, message: str) -> None:
    """Emit a run-level notice/warning/error in the active format."""
    from commitgate.output import annotations

    if fmt == "github":
        line = getattr(annotations, level)(message)
        stream = sys.stderr if level in ("warning", "error") else sys.stdout
        print(line, file=stream)
        return
    style = {"notice": "dim", "warning": "yellow", "error": "bold red"}[level]
    console.print(f"[{style}]{escape(message)}[/{style}]")


# ── lint ──────────────────────────────────────────────────────────────────────


@app.command()
def lint(
    range_spec: Optional[str] = typer.Option(None, "--range", "-r", help="Commit range, e.g. origin/main..HEAD"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of commits to check"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .commitgate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | github"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Lint the subjects of every non-merge commit in a range."""
    from commitgate.git.adapter import GitError, get_commits, infer_range_from_env
    from commitgate.linter.engine import lint_commits
    from commitgate.output import annotations, json_report, terminal

    repo_root = _resolve_repo_root()
    cfg = _load(repo_root, config)

    # --- CI auto-detection ---
    ci_mode = ci or _detect_ci()
    if ci_mode and cfg.output.format == "terminal" and format is None:
        if cfg.ci.annotation_format == "github":
            cfg.output.format = "github"

    # --- CLI overrides ---
    if format:
        if format not in _FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if limit is not None:
        if limit < 1:
            console.print(f"[bold red]Invalid limit:[/bold red] {limit}")
            raise typer.Exit(code=2)
        cfg.ci.commit_limit = limit
    fmt = cfg.output.format

    # --- Bot skip ---
    actor = os.environ.get("GITHUB_ACTOR", "")
    if cfg.ci.skip_for_bot and actor and actor in cfg.ci.bot_actors:
        _report(fmt, "notice", f"Skipping for {actor}.")
        raise typer.Exit(code=0)

    registry = _build_rules(cfg, repo_root)
    if range_spec is None:
        range_spec = infer_range_from_env()

    if verbose or debug:
        console.print(f"[dim]Rules loaded: {len(registry.enabled_rules())}[/dim]")
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]Range: {range_spec or '(default)'}[/dim]")
        console.print(f"[dim]CI mode: {ci_mode}[/dim]")

    # --- Get commits ---
    try:
        batch = get_commits(repo_root, range_spec, cfg.ci.commit_limit)
    except GitError as exc:
        if exc.fallback_reason:
            _report(fmt, "warning", f"Could not read git log ({exc.fallback_reason}). Falling back to HEAD")
        _report(fmt, "error", f"Failed to get git commits: {exc}")
        raise typer.Exit(code=2) from exc

    if batch.fell_back:
        _report(fmt, "warning", f"Could not read git log ({batch.fallback_reason}). Falling back to HEAD")

    if not batch.commits:
        if fmt == "json":
            from commitgate.findings.models import LintResult

            print(json_report.render(LintResult(range_spec=range_spec)))
        else:
            _report(fmt, "warning", "No commits found to lint.")
        raise typer.Exit(code=0)

    if verbose or debug:
        console.print(f"[dim]Commits to check: {len(batch)}[/dim]")

    # --- Lint ---
    result = lint_commits(batch.commits, cfg.lint, registry, range_spec=range_spec)

    if debug:
        console.print(f"[dim]Lint duration: {result.lint_duration_ms:.0f}ms[/dim]")

    # --- Output ---
    report_text: Optional[str] = None

    if fmt == "terminal":
        terminal.render(result, show_summary=cfg.output.show_summary)
    elif fmt == "json":
        report_text = json_report.render(result)
        print(report_text)
    elif fmt == "github":
        report_text = annotations.render(result)
        print(report_text)

    # --- Write to file ---
    if output:
        if report_text is None:
            report_text = json_report.render(result)
        Path(output).write_text(report_text + "\n", encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    if result.failed:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── check ─────────────────────────────────────────────────────────────────────


def read_subject(text: str) -> str:
    """Return the first line of a commit message that is not blank or a comment."""
    for line in text.splitlines():
        if line.strip() and not line.startswith("#"):
            return line.strip()
    return ""


@app.command()
def check(
    message_file: Optional[Path] = typer.Argument(None, help="Commit message file (as given to commit-msg)"),
    subject: Optional[str] = typer.Option(None, "--subject", "-s", help="Subject line to check"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .commitgate.toml"),
) -> None:
    """Lint a single commit message (used by the commit-msg hook)."""
    from commitgate.git.adapter import GitError, get_repo_root
    from commitgate.linter.engine import lint_subject

    if (message_file is None) == (subject is None):
        console.print("[bold red]Error:[/bold red] pass exactly one of MESSAGE_FILE or --subject")
        raise typer.Exit(code=2)

    if message_file is not None:
        try:
            text = message_file.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {message_file}: {exc}")
            raise typer.Exit(code=2) from exc
        subject = read_subject(text)
    assert subject is not None

    try:
        repo_root: Optional[Path] = get_repo_root()
    except GitError:
        repo_root = None
    cfg = _load(repo_root or Path.cwd(), config)
    registry = _build_rules(cfg, repo_root)

    errors = lint_subject(subject, cfg.lint, registry)
    if not errors:
        console.print("[green]✓[/green] Commit subject complies with rules.")
        raise typer.Exit(code=0)

    for msg in errors:
        console.print(f"[red]✗[/red] {escape(msg)}")
    console.print(f"[dim]Subject:[/dim] {escape(repr(subject))}")
    raise typer.Exit(code=1)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing commit-msg hook"),
) -> None:
    """Install commitgate as a git commit-msg hook."""
    from commitgate.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {escape(msg)}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the commitgate commit-msg hook."""
    from commitgate.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {escape(msg)}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .commitgate.toml in the repo root."""
    from commitgate.config.defaults import DEFAULT_TOML
    from commitgate.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"commitgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """commitgate — Lint commit subjects before they reach your main branch."""
