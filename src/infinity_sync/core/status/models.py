"""
Status record models.

The status record (.infinity/sync-status.json) is the structured store of
sync outcomes: the latest sync, running counters, and a numbered activity
log whose numbering comes from the run counter.
"""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

# Older entries are dropped; the counters keep the totals
MAX_ACTIVITY_ENTRIES = 200


class ActivityEntry(BaseModel):
    """
    One recorded sync run.

    Example:
        >>> entry = ActivityEntry(
        ...     number=3, timestamp=datetime(2026, 1, 2, 3, 4, 5),
        ...     operation="PULL", success=True,
        ... )
        >>> entry.outcome
        'Success'
    """

    number: int = Field(..., ge=1, description="Sequential run number")
    timestamp: datetime = Field(..., description="When the run was recorded")
    operation: str = Field(..., description="Sync mode name, e.g. BIDIRECTIONAL")
    success: bool = Field(..., description="Whether the run succeeded")

    @computed_field
    @property
    def outcome(self) -> str:
        return "Success" if self.success else "Failed"

    @property
    def glyph(self) -> str:
        return "✅" if self.success else "❌"


class SyncStatusRecord(BaseModel):
    """
    Persistent record of sync outcomes.

    Counters only ever increase, so activity numbers are unique and
    ordered by the time they were recorded.
    """

    last_sync_at: datetime | None = Field(default=None, description="Time of the latest run")
    last_operation: str | None = Field(default=None, description="Mode of the latest run")
    last_success: bool | None = Field(default=None, description="Outcome of the latest run")

    total_runs: int = Field(default=0, ge=0, description="Runs recorded")
    successful_runs: int = Field(default=0, ge=0, description="Runs that succeeded")
    failed_runs: int = Field(default=0, ge=0, description="Runs that failed")

    activity: list[ActivityEntry] = Field(
        default_factory=list,
        description=f"Most recent runs, oldest first (at most {MAX_ACTIVITY_ENTRIES})",
    )

    def add_run(self, timestamp: datetime, operation: str, success: bool) -> ActivityEntry:
        """
        Record a run and return its activity entry.

        Args:
            timestamp: When the run finished
            operation: Sync mode name
            success: Whether it succeeded

        Returns:
            The new ActivityEntry (numbered total_runs after incrementing).
            Only the latest MAX_ACTIVITY_ENTRIES entries are kept.
        """
        self.total_runs += 1
        if success:
            self.successful_runs += 1
        else:
            self.failed_runs += 1

        self.last_sync_at = timestamp
        self.last_operation = operation
        self.last_success = success

        entry = ActivityEntry(
            number=self.total_runs,
            timestamp=timestamp,
            operation=operation,
            success=success,
        )
        self.activity.append(entry)
        del self.activity[:-MAX_ACTIVITY_ENTRIES]
        return entry

    def recent(self, limit: int = 10) -> list[ActivityEntry]:
        """Most recent activity entries, newest first."""
        return list(reversed(self.activity[-limit:])) if limit > 0 else []
