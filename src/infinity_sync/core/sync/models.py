"""
Data models for sync runs.

Defines the phases a run moves through and the Pydantic result model
returned by the orchestrator.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from infinity_sync.core.config.models import SyncMode
from infinity_sync.core.git.models import GitOperation, OperationResult


class SyncPhase(str, Enum):
    """Phases of a sync run, in order."""

    PREFLIGHT = "preflight"
    BRANCH_RESOLUTION = "branch_resolution"
    CLEANLINESS = "cleanliness"
    FETCH = "fetch"
    DISPATCH = "dispatch"
    RECORD = "record"
    EXIT = "exit"


class SyncRunResult(BaseModel):
    """
    Result of a complete sync run.

    Provides the outcome, the operations that were attempted, and the
    process exit code.
    """

    mode: SyncMode = Field(description="Mode the run dispatched on")
    remote: str = Field(description="Remote name")
    branch: str = Field(description="Branch name")
    dry_run: bool = Field(default=False, description="Whether git operations were only logged")
    forced: bool = Field(default=False, description="Whether a dirty tree was overridden")

    success: bool = Field(default=False, description="Whether the selected mode succeeded")
    phase: SyncPhase = Field(default=SyncPhase.PREFLIGHT, description="Last phase reached")

    fetch: OperationResult | None = Field(default=None, description="Result of the fetch")
    operations: list[OperationResult] = Field(
        default_factory=list,
        description="Pull/push results in the order they ran",
    )

    started_at: datetime | None = Field(default=None)
    completed_at: datetime | None = Field(default=None)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @property
    def duration_seconds(self) -> float | None:
        """Calculate run duration in seconds."""
        if self.started_at and self.completed_at:
            delta = self.completed_at - self.started_at
            return delta.total_seconds()
        return None

    def attempted(self, operation: GitOperation) -> bool:
        """Check whether a pull or push was attempted during the run."""
        return any(op.operation == operation for op in self.operations)

    def summary(self) -> str:
        """Generate a human-readable summary of the run."""
        outcome = "succeeded" if self.success else "failed"
        parts = [f"{self.mode.label} {self.remote}/{self.branch} {outcome}"]
        if self.dry_run:
            parts.append("dry run")
        parts.extend(op.summary() for op in self.operations)
        return ", ".join(parts)
