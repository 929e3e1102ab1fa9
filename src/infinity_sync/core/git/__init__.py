"""
Git command execution for sync runs.

Example:
    >>> from infinity_sync.core.git import GitRunner
    >>> runner = GitRunner(Path("."), SyncLogger(log_file))
    >>> result = runner.pull("origin", "main")
    >>> result.success
    True
"""

from infinity_sync.core.git.models import (
    GitOperation,
    OperationResult,
    StatusEntry,
    WorkingTreeStatus,
)
from infinity_sync.core.git.runner import GitError, GitRunner

__all__ = [
    "GitError",
    "GitOperation",
    "GitRunner",
    "OperationResult",
    "StatusEntry",
    "WorkingTreeStatus",
]
