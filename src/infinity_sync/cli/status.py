"""
infinity-sync status - show recorded sync outcomes.

Reads the structured status record written after each sync and renders
the latest outcome, the run counters and recent activity.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from infinity_sync.cli.errors import ExitCode, print_error
from infinity_sync.core.context import SyncContext
from infinity_sync.core.status import StatusRecorder
from infinity_sync.utils.logging import SyncLogger, format_timestamp
from infinity_sync.utils.project import find_repository_root

console = Console()


def status(
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        min=0,
        help="Number of recent activity entries to show",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the raw status record as JSON",
    ),
) -> None:
    """
    Show the outcome of recent syncs.

    Examples:
        infinity-sync status            # Latest sync and recent activity
        infinity-sync status -n 25      # Show more activity
        infinity-sync status --json     # Machine-readable record
    """
    root = find_repository_root(Path.cwd())
    if root is None:
        print_error(
            "Not a git repository",
            reason="The status record lives in the repository's .infinity/ directory",
            solution="cd to your repository root",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    context = SyncContext.create(project_dir=root)
    # Console-only logger: reading status must not append to the sync log
    recorder = StatusRecorder(context, SyncLogger(None, console=console))

    # Missing and unreadable records both load as empty
    record = recorder.load_record()
    if record.total_runs == 0:
        console.print("[yellow]○[/yellow] No syncs recorded yet")
        console.print("\n[dim]→ Run [bold]infinity-sync[/bold] to record your first sync.[/dim]")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if as_json:
        typer.echo(record.model_dump_json(indent=2))
        return

    if record.last_success:
        console.print(f"[green]✓[/green] Last sync succeeded ({record.last_operation})")
    else:
        console.print(f"[red]✗[/red] Last sync failed ({record.last_operation})")

    table = Table(title="Sync Status", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    if record.last_sync_at:
        table.add_row("Last sync", format_timestamp(record.last_sync_at))
    table.add_row("Total runs", str(record.total_runs))
    table.add_row("Succeeded", f"[green]{record.successful_runs}[/green]")
    table.add_row("Failed", f"[red]{record.failed_runs}[/red]")

    console.print()
    console.print(table)

    recent = record.recent(limit)
    if recent:
        activity = Table(title="Recent Activity")
        activity.add_column("#", justify="right")
        activity.add_column("Time")
        activity.add_column("Operation")
        activity.add_column("Result")
        for entry in recent:
            color = "green" if entry.success else "red"
            activity.add_row(
                str(entry.number),
                format_timestamp(entry.timestamp),
                entry.operation,
                f"[{color}]{entry.glyph} {entry.outcome}[/{color}]",
            )
        console.print()
        console.print(activity)


__all__ = ["status"]
