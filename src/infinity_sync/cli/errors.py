"""
Standardized error handling and exit codes for the infinity-sync CLI.

This module provides consistent error messaging with actionable guidance.
Every failure exits with 1; callers do not distinguish failure kinds.
"""

from enum import IntEnum

from rich.console import Console

from infinity_sync.core.sync.exceptions import SyncPreconditionError

console = Console()


class ExitCode(IntEnum):
    """Exit codes for infinity-sync."""

    SUCCESS = 0
    """Sync completed successfully."""

    GENERAL_ERROR = 1
    """Any failure: usage error, refused run, failed sync or unexpected fault."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Not a git repository",
        ...     reason="Sync runs from the repository root",
        ...     solution="cd to your repository root",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_precondition_error(error: SyncPreconditionError) -> None:
    """Print the hint for a refused run.

    The problem itself has already been logged by the orchestrator.
    """
    if error.solution:
        console.print(f"[cyan]→ Try:[/cyan] {error.solution}")


def print_invalid_option_error(option: str, value: str, valid_options: list[str]) -> None:
    """Print error when an invalid option value is provided."""
    valid_str = ", ".join(valid_options)
    print_error(
        f"Invalid {option}: {value}",
        reason=f"Valid options are: {valid_str}",
        solution=f"Use one of: {valid_str}",
    )


def print_unexpected_error(error: BaseException) -> None:
    """Print error for a fault nothing else handled."""
    print_error(
        f"Unexpected error: {error}",
        reason="The sync stopped before completing",
        solution="infinity-sync --debug  # for detailed logging",
    )


__all__ = [
    "ExitCode",
    "print_error",
    "print_invalid_option_error",
    "print_precondition_error",
    "print_unexpected_error",
]
