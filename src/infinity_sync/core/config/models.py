"""
Configuration data models for infinity-sync.

These models define the structure of .infinity/sync-config.json,
with validation and type safety via Pydantic.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SyncMode(str, Enum):
    """Direction of a sync run."""

    PULL = "pull"
    PUSH = "push"
    BIDIRECTIONAL = "bidirectional"

    @property
    def label(self) -> str:
        """Upper-case name used in the status record and log lines."""
        return self.value.upper()


class PullStrategy(str, Enum):
    """How `git pull` integrates remote changes."""

    MERGE = "merge"
    REBASE = "rebase"
    FF_ONLY = "ff-only"

    @property
    def pull_flag(self) -> str:
        """The `git pull` flag selecting this strategy."""
        return {
            PullStrategy.MERGE: "--no-rebase",
            PullStrategy.REBASE: "--rebase",
            PullStrategy.FF_ONLY: "--ff-only",
        }[self]


class SyncConfig(BaseModel):
    """
    Sync configuration loaded from .infinity/sync-config.json.

    Every field is optional in the file. Command-line flags take
    precedence over these values.

    Example:
        >>> config = SyncConfig(mode="pull", protected_branches=["main"])
        >>> config.mode
        <SyncMode.PULL: 'pull'>
        >>> config.is_protected("main")
        True
    """

    model_config = ConfigDict(extra="ignore")

    mode: SyncMode = Field(
        default=SyncMode.BIDIRECTIONAL,
        description="Sync direction: pull, push or bidirectional"
    )
    remote: str = Field(
        default="origin",
        min_length=1,
        description="Remote name passed to fetch, pull and push"
    )
    branch: Optional[str] = Field(
        default=None,
        description="Branch to sync (None = currently checked-out branch)"
    )
    strategy: Optional[PullStrategy] = Field(
        default=None,
        description="Pull strategy: merge, rebase or ff-only (None = git default)"
    )
    protected_branches: list[str] = Field(
        default_factory=list,
        description="Branches that are never pushed to"
    )
    exclude_paths: list[str] = Field(
        default_factory=list,
        description="Paths ignored by the working tree cleanliness check"
    )
    dry_run: bool = Field(
        default=False,
        description="Log planned git operations without running them"
    )

    @field_validator("mode", "strategy", mode="before")
    @classmethod
    def normalize_enum_case(cls, v: object) -> object:
        """Accept enum values in any case ("PULL", "Rebase")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("branch")
    @classmethod
    def blank_branch_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty branch name as "use the current branch"."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("exclude_paths")
    @classmethod
    def normalize_exclude_paths(cls, v: list[str]) -> list[str]:
        """Strip leading "./" and trailing slashes so paths compare cleanly."""
        normalized = []
        for path in v:
            path = path.strip()
            while path.startswith("./"):
                path = path[2:]
            path = path.rstrip("/")
            if path:
                normalized.append(path)
        return normalized

    def is_protected(self, branch: str) -> bool:
        """Check whether pushes to a branch are refused."""
        return branch in self.protected_branches
