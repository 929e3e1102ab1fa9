"""
infinity-sync CLI - Main application entry point.

This module sets up the Typer CLI application. Running `infinity-sync`
without a subcommand performs a sync.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from infinity_sync import __version__
from infinity_sync.cli import status
from infinity_sync.cli.errors import (
    ExitCode,
    print_invalid_option_error,
    print_precondition_error,
    print_unexpected_error,
)
from infinity_sync.core.config import DEFAULT_CONFIG_PATH, SyncMode, load_layered_env
from infinity_sync.core.context import SyncContext, SyncOptions
from infinity_sync.core.sync import SyncOrchestrator, SyncPreconditionError
from infinity_sync.utils.logging import SyncLogger

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="infinity-sync",
    help="Synchronize a git repository with its remote",
    no_args_is_help=False,
    invoke_without_command=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    mode: str | None = typer.Option(
        None,
        "--mode",
        "-m",
        help="Sync mode: pull, push, bidirectional (default: bidirectional)",
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        "-r",
        help="Remote name (default: origin)",
    ),
    branch: str | None = typer.Option(
        None,
        "--branch",
        "-b",
        help="Branch to sync (default: current branch)",
    ),
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to sync-config.json",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Sync even with uncommitted changes",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-d",
        help="Show what would be synced without syncing",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Sync the current repository with its remote.

    Fetches from the remote, then pulls, pushes, or pulls and then pushes
    the branch. Refuses to run over uncommitted changes unless --force is
    given. Every event is mirrored to .infinity/sync.log when that
    directory exists.

    Examples:
        infinity-sync                        # Pull then push the current branch
        infinity-sync -m pull -b main        # Pull main only
        infinity-sync -m push --dry-run      # Show the push without running it
        infinity-sync status                 # Show recorded outcomes
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # Precedence: OS env > project .env > user .env
    loaded_env = load_layered_env()
    if loaded_env:
        logger.debug("Loaded from .env files: %s", sorted(loaded_env))

    # If a subcommand was invoked, don't run the default action
    if ctx.invoked_subcommand is not None:
        return

    sync_mode: SyncMode | None = None
    if mode is not None:
        try:
            sync_mode = SyncMode(mode.strip().lower())
        except ValueError:
            print_invalid_option_error("mode", mode, [m.value for m in SyncMode])
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    options = SyncOptions(
        mode=sync_mode,
        remote=remote,
        branch=branch,
        config_path=config,
        force=force,
        dry_run=dry_run,
    )
    context = SyncContext.create(options)
    sync_logger = SyncLogger(context.log_file, console=console, clock=context.clock)
    orchestrator = SyncOrchestrator(context, sync_logger=sync_logger)

    console.rule(f"[magenta]INFINITY SYNC v{__version__}[/magenta]")

    try:
        result = orchestrator.run()
    except SyncPreconditionError as e:
        print_precondition_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except KeyboardInterrupt:
        sync_logger.warning("⚠ Sync interrupted")
        raise typer.Exit(ExitCode.SIGINT)
    except Exception as e:
        sync_logger.error(f"✗ Unexpected error: {e}")
        logger.debug("Unhandled exception during sync", exc_info=True)
        print_unexpected_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    logger.debug("Sync result: %s", result.summary())
    raise typer.Exit(result.exit_code)


app.command(name="status")(status.status)


@app.command()
def version() -> None:
    """Show infinity-sync version and exit."""
    console.print(f"infinity-sync version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """
    Main CLI entry point.

    Command-line usage errors exit with 1, like every other failure.
    """
    try:
        app()
    except SystemExit as e:
        if e.code == 2:
            sys.exit(ExitCode.GENERAL_ERROR)
        raise


__all__ = ["app", "cli_main"]
