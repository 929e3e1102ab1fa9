"""
Data models for git operations.

Defines Pydantic models for operation results and working tree status.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class GitOperation(str, Enum):
    """Remote operations run during a sync."""

    FETCH = "fetch"
    PULL = "pull"
    PUSH = "push"


class OperationResult(BaseModel):
    """
    Result of a fetch, pull or push.

    Example:
        >>> result = OperationResult(
        ...     operation=GitOperation.PULL, remote="origin", branch="main", success=True
        ... )
        >>> result.summary()
        'pull origin/main succeeded'
    """

    operation: GitOperation = Field(description="Which git operation ran")
    remote: str = Field(description="Remote name")
    branch: str | None = Field(default=None, description="Branch name (None for fetch)")
    success: bool = Field(description="Whether the operation succeeded")
    dry_run: bool = Field(default=False, description="True if the command was only logged")
    exit_code: int | None = Field(
        default=None,
        description="Process exit code (None for dry runs and invocation faults)",
    )
    command: list[str] = Field(default_factory=list, description="Full git command line")
    message: str = Field(default="", description="Human-readable detail")

    @property
    def target(self) -> str:
        """remote/branch, or just the remote for fetch."""
        return f"{self.remote}/{self.branch}" if self.branch else self.remote

    def summary(self) -> str:
        """Generate a human-readable summary of the result."""
        outcome = "succeeded" if self.success else "failed"
        parts = [f"{self.operation.value} {self.target} {outcome}"]
        if self.dry_run:
            parts.append("dry run")
        if self.exit_code not in (None, 0):
            parts.append(f"exit code {self.exit_code}")
        if self.message and not self.success:
            parts.append(self.message)
        return ", ".join(parts)


class StatusEntry(BaseModel):
    """One changed path from `git status --porcelain`."""

    code: str = Field(description="Two-letter XY status code, e.g. ' M' or '??'")
    path: str = Field(description="Path relative to the repository root")
    orig_path: str | None = Field(default=None, description="Source path of a rename or copy")

    def is_under(self, prefix: str) -> bool:
        """Check whether this entry's path equals or lies below prefix."""
        prefix = prefix.rstrip("/")
        return self.path == prefix or self.path.startswith(prefix + "/")


class WorkingTreeStatus(BaseModel):
    """Parsed working tree status."""

    entries: list[StatusEntry] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.entries

    def excluding(self, paths: list[str]) -> WorkingTreeStatus:
        """Return a status without entries under any of the given paths."""
        return WorkingTreeStatus(
            entries=[e for e in self.entries if not any(e.is_under(p) for p in paths)]
        )

    @classmethod
    def from_porcelain_z(cls, output: str) -> WorkingTreeStatus:
        """
        Parse `git status --porcelain -z` output.

        Records are NUL-separated `XY path` items. A rename or copy is
        followed by an extra record holding the source path.
        """
        entries: list[StatusEntry] = []
        records = output.split("\0")
        i = 0
        while i < len(records):
            record = records[i]
            i += 1
            if len(record) < 4:
                continue
            code, path = record[:2], record[3:]
            orig_path = None
            if code[0] in "RC" and i < len(records):
                orig_path = records[i]
                i += 1
            entries.append(StatusEntry(code=code, path=path, orig_path=orig_path))
        return cls(entries=entries)
