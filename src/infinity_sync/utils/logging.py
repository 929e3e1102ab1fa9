"""
Console and log-file event logging for infinity-sync.

Every event is printed to the console as a severity-colored line and
mirrored to the sync log (.infinity/sync.log) as plain text:

    [2026-10-17 14:03:22] [SUCCESS] ✓ Pull completed successfully

The log file is only written when its directory already exists, so a
run never creates untracked files in a repository that has not opted in.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.text import Text

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(str, Enum):
    """Severity of a sync event."""

    SUCCESS = "SUCCESS"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def style(self) -> str:
        """Rich style used for console output."""
        return {
            LogLevel.SUCCESS: "green",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }[self]


def format_timestamp(moment: datetime) -> str:
    """Format a timestamp the way log lines and status entries show it."""
    return moment.strftime(TIMESTAMP_FORMAT)


def format_log_line(moment: datetime, level: LogLevel, message: str) -> str:
    """
    Format a single sync log line.

    Example:
        >>> format_log_line(datetime(2026, 1, 2, 3, 4, 5), LogLevel.INFO, "hello")
        '[2026-01-02 03:04:05] [INFO] hello'
    """
    return f"[{format_timestamp(moment)}] [{level.value}] {message}"


class SyncLogger:
    """
    Severity-colored console output mirrored to the sync log.

    Example:
        logger = SyncLogger(Path(".infinity/sync.log"))
        logger.info("⬇ Pulling changes from origin/main...")
        logger.success("✓ Pull completed successfully")
    """

    def __init__(
        self,
        log_file: Path | None,
        *,
        console: Console | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the logger.

        Args:
            log_file: Path to the sync log, or None for console-only output
            console: Rich console to print to (a new one by default)
            clock: Source of timestamps for log lines
        """
        self.log_file = Path(log_file) if log_file is not None else None
        self.console = console or Console()
        self.clock = clock

    def log(self, level: LogLevel, message: str) -> None:
        """Print an event and append it to the log file."""
        # Text avoids rich markup parsing of things like "[DRY RUN]"
        self.console.print(Text(message, style=level.style))
        self._write(level, message)

    def success(self, message: str) -> None:
        self.log(LogLevel.SUCCESS, message)

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self.log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def _write(self, level: LogLevel, message: str) -> None:
        if self.log_file is None or not self.log_file.parent.is_dir():
            return
        line = format_log_line(self.clock(), level, message) + "\n"
        try:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            # A log write failure must not stop the sync
            self.console.print(
                Text(f"Warning: Failed to write to log file {self.log_file}: {e}", style="yellow")
            )
