"""
Sync orchestration.

Runs fetch, pull and push for one repository in a fixed sequence and
records the outcome.

Example:
    >>> from infinity_sync.core.sync import SyncOrchestrator
    >>> context = SyncContext.create(SyncOptions(mode=SyncMode.PULL))
    >>> result = SyncOrchestrator(context).run()
    >>> result.success
    True
"""

from infinity_sync.core.sync.exceptions import (
    BranchResolutionError,
    DirtyWorkingTreeError,
    NotARepositoryError,
    SyncPreconditionError,
)
from infinity_sync.core.sync.models import SyncPhase, SyncRunResult
from infinity_sync.core.sync.orchestrator import RunSettings, SyncOrchestrator

__all__ = [
    "BranchResolutionError",
    "DirtyWorkingTreeError",
    "NotARepositoryError",
    "RunSettings",
    "SyncOrchestrator",
    "SyncPhase",
    "SyncPreconditionError",
    "SyncRunResult",
]
