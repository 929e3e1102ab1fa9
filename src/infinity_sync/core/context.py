"""
Run context for a single sync invocation.

The context is built once at process start and passed explicitly to every
component, so the run timestamp, the clock and the file locations are
never module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from infinity_sync.core.config.loader import DEFAULT_CONFIG_PATH, get_config_path
from infinity_sync.core.config.models import SyncMode

STATE_DIR = ".infinity"
LOG_FILE = "sync.log"
STATUS_RECORD_FILE = "sync-status.json"
STATUS_DOCUMENT_FILE = "ACTIVE_MEMORY.md"


@dataclass
class SyncOptions:
    """Options requested on the command line.

    None means "not given", so the config file or the default applies.

    Attributes:
        mode: Requested sync mode
        remote: Requested remote name
        branch: Requested branch name
        config_path: Path to the config file
        force: Sync even when the working tree is dirty
        dry_run: Log git operations instead of running them
    """
    mode: SyncMode | None = None
    remote: str | None = None
    branch: str | None = None
    config_path: Path = DEFAULT_CONFIG_PATH
    force: bool = False
    dry_run: bool = False


@dataclass
class SyncContext:
    """Everything a sync run needs to know about its environment.

    Attributes:
        project_dir: Repository root the run operates on
        options: Options requested for this run
        clock: Source of the current time
        started_at: When the run began
    """
    project_dir: Path
    options: SyncOptions = field(default_factory=SyncOptions)
    clock: Callable[[], datetime] = datetime.now
    started_at: datetime | None = None

    def __post_init__(self) -> None:
        self.project_dir = Path(self.project_dir).resolve()
        if self.started_at is None:
            self.started_at = self.clock()

    @classmethod
    def create(
        cls,
        options: SyncOptions | None = None,
        project_dir: Path | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> SyncContext:
        """Build the context for a run in project_dir (default: cwd)."""
        return cls(
            project_dir=project_dir or Path.cwd(),
            options=options or SyncOptions(),
            clock=clock,
        )

    def now(self) -> datetime:
        return self.clock()

    @property
    def state_dir(self) -> Path:
        """Directory holding config, log and status files."""
        return self.project_dir / STATE_DIR

    @property
    def log_file(self) -> Path:
        return self.state_dir / LOG_FILE

    @property
    def status_record_path(self) -> Path:
        return self.state_dir / STATUS_RECORD_FILE

    @property
    def status_document_path(self) -> Path:
        return self.state_dir / STATUS_DOCUMENT_FILE

    @property
    def config_path(self) -> Path:
        return get_config_path(self.options.config_path, self.project_dir)

    def artifact_paths(self) -> list[str]:
        """Files written by a run, relative to the project root (POSIX style)."""
        return [
            path.relative_to(self.project_dir).as_posix()
            for path in (self.log_file, self.status_record_path, self.status_document_path)
        ]
