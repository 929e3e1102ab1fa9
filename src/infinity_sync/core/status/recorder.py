"""
Status recorder for sync runs.

Records the outcome of each run in three places:
- one line in the sync log (.infinity/sync.log)
- the structured status record (.infinity/sync-status.json)
- the status document (.infinity/ACTIVE_MEMORY.md), if it exists

Recording is best-effort. Every failure is reported as a warning and
none of them affect the outcome of the run.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import ValidationError

from infinity_sync.core.context import SyncContext
from infinity_sync.utils.logging import SyncLogger, format_timestamp

from .models import ActivityEntry, SyncStatusRecord

LAST_SYNC_PATTERN = re.compile(r"Last Sync:.*")
ACTIVITY_SENTINEL = "*This file is"


def replace_last_sync(content: str, entry: ActivityEntry) -> tuple[str, bool]:
    """
    Rewrite the first "Last Sync:" line of a status document.

    Everything from "Last Sync:" to the end of the line is replaced, so a
    markdown prefix such as "- **" is kept.

    Returns:
        Tuple of (new content, whether a line was replaced)
    """
    replacement = (
        f"Last Sync:** {format_timestamp(entry.timestamp)} ({entry.operation}) {entry.glyph}"
    )
    updated, count = LAST_SYNC_PATTERN.subn(lambda _: replacement, content, count=1)
    return updated, count == 1


def insert_activity_entry(content: str, entry: ActivityEntry) -> tuple[str, bool]:
    """
    Insert a numbered activity line before the sentinel phrase.

    Returns:
        Tuple of (new content, whether the sentinel was found)
    """
    index = content.find(ACTIVITY_SENTINEL)
    if index == -1:
        return content, False

    line = (
        f"{entry.number}. **{format_timestamp(entry.timestamp)}:** "
        f"{entry.operation} - {entry.outcome}"
    )
    before = content[:index]
    if before and not before.endswith("\n"):
        before += "\n"
    return f"{before}{line}\n\n{content[index:]}", True


def _write_atomic(path: Path, content: str) -> None:
    """Write a file via temp file + rename."""
    temp_path = path.with_name(path.name + ".tmp")
    try:
        temp_path.write_text(content, encoding="utf-8")
        temp_path.replace(path)
    except OSError:
        # Clean up temp file on failure
        if temp_path.exists():
            temp_path.unlink()
        raise


class StatusRecorder:
    """
    Records sync outcomes.

    Example:
        >>> recorder = StatusRecorder(context, sync_logger)
        >>> entry = recorder.record(True, "BIDIRECTIONAL")
        >>> entry.number
        1
    """

    def __init__(self, context: SyncContext, sync_logger: SyncLogger):
        self.context = context
        self.log = sync_logger

    @property
    def record_path(self) -> Path:
        return self.context.status_record_path

    @property
    def document_path(self) -> Path:
        return self.context.status_document_path

    def load_record(self) -> SyncStatusRecord:
        """
        Load the status record, or a fresh one if it is missing or unreadable.
        """
        if not self.record_path.exists():
            return SyncStatusRecord()

        try:
            return SyncStatusRecord.model_validate_json(
                self.record_path.read_text(encoding="utf-8")
            )
        except (ValidationError, ValueError, OSError) as e:
            self.log.warning(
                f"⚠ Status record {self.record_path.name} is unreadable, starting a new one ({e})"
            )
            return SyncStatusRecord()

    def save_record(self, record: SyncStatusRecord) -> bool:
        """
        Save the status record atomically.

        The record is only written when the state directory exists.

        Returns:
            True if the record was written
        """
        if not self.record_path.parent.is_dir():
            return False

        try:
            _write_atomic(self.record_path, record.model_dump_json(indent=2) + "\n")
        except OSError as e:
            self.log.warning(f"⚠ Could not save status record: {e}")
            return False
        return True

    def record(self, success: bool, operation: str) -> ActivityEntry:
        """
        Record the outcome of a sync run.

        Args:
            success: Whether the run succeeded
            operation: Sync mode name (e.g. "PULL", "BIDIRECTIONAL")

        Returns:
            The activity entry for this run
        """
        record = self.load_record()
        entry = record.add_run(self.context.now(), operation, success)

        self.log.info(f"📝 Recorded sync #{entry.number}: {operation} - {entry.outcome}")

        self.save_record(record)
        self.update_document(entry)
        return entry

    def update_document(self, entry: ActivityEntry) -> bool:
        """
        Rewrite the status document for a recorded run.

        Returns:
            True if the document was changed
        """
        path = self.document_path
        if not path.exists():
            return False

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.log.warning(f"⚠ Could not read {path.name}: {e}")
            return False

        updated, replaced = replace_last_sync(content, entry)
        if not replaced:
            self.log.warning(f"⚠ No 'Last Sync:' line found in {path.name}")

        updated, inserted = insert_activity_entry(updated, entry)
        if not inserted:
            self.log.warning(f"⚠ Activity log marker '{ACTIVITY_SENTINEL}' not found in {path.name}")

        if updated == content:
            return False

        try:
            _write_atomic(path, updated)
        except OSError as e:
            self.log.warning(f"⚠ Could not update {path.name}: {e}")
            return False

        self.log.success(f"✓ {path.name} updated")
        return True
