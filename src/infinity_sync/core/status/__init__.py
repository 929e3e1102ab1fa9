"""
Sync status recording.

This module provides the structured status record and the recorder that
updates it, the sync log and the status document after each run.
"""

from .models import MAX_ACTIVITY_ENTRIES, ActivityEntry, SyncStatusRecord
from .recorder import (
    ACTIVITY_SENTINEL,
    StatusRecorder,
    insert_activity_entry,
    replace_last_sync,
)

__all__ = [
    "ACTIVITY_SENTINEL",
    "ActivityEntry",
    "MAX_ACTIVITY_ENTRIES",
    "StatusRecorder",
    "SyncStatusRecord",
    "insert_activity_entry",
    "replace_last_sync",
]
