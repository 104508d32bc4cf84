"""Rich terminal reporter."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from commitgate.findings.aggregator import group_by_commit
from commitgate.findings.models import LintResult


def render(result: LintResult, *, show_summary: bool = True, console: Optional[Console] = None) -> None:
    """Print lint results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.failed:
        console.print()
        console.print("[bold green]✅ All commit subjects comply with rules.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="Commit Lint Violations",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Subject", style="magenta")
    table.add_column("Problem", min_width=20)

    for violations in group_by_commit(result.violations).values():
        first = violations[0]
        table.add_row(
            first.short_sha,
            escape(first.subject),
            "\n".join(escape(v.message) for v in violations),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]❌ Found {result.total_violations} errors across "
        f"{result.commits_checked} commit(s).[/bold red]"
    )


def _print_summary(console: Console, result: LintResult) -> None:
    console.print()
    if result.range_spec:
        console.print(f"[dim]Range:[/dim]          {result.range_spec}")
    console.print(f"[dim]Commits checked:[/dim] {result.commits_checked}")
    console.print(f"[dim]Failing commits:[/dim] {result.failing_commits}")
    console.print(f"[dim]Violations:[/dim]      {result.total_violations}")
    console.print(f"[dim]Duration:[/dim]        {result.lint_duration_ms:.0f}ms")
