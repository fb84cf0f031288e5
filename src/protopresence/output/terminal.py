"""Rich terminal reporter — pass/fail banner and violation lines."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from protopresence.findings.models import CheckResult

PASS_BANNER = "✅ All new proto fields are explicitly optional (or repeated/map/oneof)."
FAIL_BANNER = "❌ The following new proto fields are missing the `optional` keyword:"


def render(result: CheckResult, *, show_summary: bool = False) -> None:
    """Print the verdict to stdout; the optional summary goes to stderr."""
    # Plain text: paths may contain markup-like brackets or :emoji: codes
    out = Console(markup=False, highlight=False, emoji=False, soft_wrap=True)

    if not result.violations:
        out.print(PASS_BANNER, style="bold green")
    else:
        out.print(FAIL_BANNER, style="bold red")
        for violation in result.violations:
            out.print(violation.message)

    if show_summary:
        _print_summary(Console(stderr=True), result)


def _print_summary(console: Console, result: CheckResult) -> None:
    console.print()
    console.print(f"[dim]Files checked:[/dim]  {result.files_checked}")
    console.print(f"[dim]Violations:[/dim]     {result.total_violations}")
    console.print(f"[dim]Accepted:[/dim]       {len(result.accepted)}")
    console.print(f"[dim]Ignored files:[/dim]  {len(result.ignored_files)}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")

    if result.accepted:
        _print_accepted(console, result)


def _print_accepted(console: Console, result: CheckResult) -> None:
    console.print()
    table = Table(
        title="Accepted by baseline",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Field", style="cyan")
    table.add_column("Type")

    for v in result.accepted:
        table.add_row(v.file, str(v.line_no), v.field_name, v.field_type)

    console.print(table)
