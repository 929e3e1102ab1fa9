"""Utility modules for infinity-sync."""

from .logging import LogLevel, SyncLogger, format_log_line, format_timestamp
from .project import REPO_ROOT_MARKERS, find_repository_root, is_repository_root

__all__ = [
    "find_repository_root",
    "format_log_line",
    "format_timestamp",
    "is_repository_root",
    "LogLevel",
    "REPO_ROOT_MARKERS",
    "SyncLogger",
]
