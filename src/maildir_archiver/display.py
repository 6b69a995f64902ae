"""Rich-based display functions for Maildir Archiver."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .models import RunCounters

console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Route log records through rich on the shared console."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def display_run_summary(counters: RunCounters, confirm: bool, remove: bool = False) -> None:
    """Display the end-of-run tallies.

    Error counts are shown only when something actually failed.
    """
    verb, action = ("Removed", "remove") if remove else ("Archived", "archive")
    lines = [
        f"[bold]{verb}:[/bold] {counters.archived}",
        f"[bold]Kept:[/bold] {counters.kept}",
    ]
    if counters.parse_errors > 0:
        lines.append(f"[yellow]Parse errors: {counters.parse_errors}[/yellow]")
    if counters.move_errors > 0:
        lines.append(f"[red]Move errors: {counters.move_errors}[/red]")

    if not confirm:
        lines.append("")
        lines.append(f"[bold]Would {action}:[/bold] {counters.previewed}")
        lines.append(
            "[yellow][DRY RUN] No messages were touched. "
            "Use --confirm to actually run the actions.[/yellow]"
        )

    console.print(Panel("\n".join(lines), title="Summary"))
