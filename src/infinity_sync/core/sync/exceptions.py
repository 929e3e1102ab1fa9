"""
Exceptions raised when a sync run cannot start.

Exception Hierarchy:
    SyncPreconditionError (base)
    ├── NotARepositoryError (no .git in the working directory)
    ├── BranchResolutionError (no branch given and HEAD is detached)
    └── DirtyWorkingTreeError (uncommitted changes and no --force)

These stop a run before any fetch, pull or push, and before the status
record is touched.
"""

from __future__ import annotations

from pathlib import Path

from infinity_sync.core.sync.models import SyncPhase


class SyncPreconditionError(Exception):
    """
    Base exception for runs refused before syncing.

    Attributes:
        message: Human-readable error message
        phase: Phase of the run that refused
        solution: Command or action that resolves the problem
    """

    def __init__(self, message: str, phase: SyncPhase, solution: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.solution = solution

    def __str__(self) -> str:
        return self.message


class NotARepositoryError(SyncPreconditionError):
    """Raised when the working directory is not a git repository root."""

    def __init__(self, project_dir: Path) -> None:
        super().__init__(
            f"Not a git repository: {project_dir}",
            SyncPhase.PREFLIGHT,
            solution="cd to your repository root  # or git init",
        )
        self.project_dir = project_dir


class BranchResolutionError(SyncPreconditionError):
    """Raised when no branch was given and none is checked out."""

    def __init__(self) -> None:
        super().__init__(
            "Could not determine the current branch (detached HEAD?)",
            SyncPhase.BRANCH_RESOLUTION,
            solution="infinity-sync --branch <name>  # or git switch <branch>",
        )


class DirtyWorkingTreeError(SyncPreconditionError):
    """Raised when the working tree has uncommitted changes and force is off."""

    def __init__(self, changed_paths: list[str]) -> None:
        super().__init__(
            f"Uncommitted changes detected ({len(changed_paths)} files)",
            SyncPhase.CLEANLINESS,
            solution="git commit -am 'WIP'  # or git stash, or infinity-sync --force",
        )
        self.changed_paths = changed_paths
