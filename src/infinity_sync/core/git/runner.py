"""
Git command runner for sync operations.

Runs `git fetch`, `git pull` and `git push` against a named remote and
branch and turns each invocation into an OperationResult. A non-zero exit
status or an invocation fault (git missing, OS error) becomes a failed
result; it is never raised to the caller. Under dry run, remote operations
are logged and reported as successful without starting a process.

Queries the orchestrator depends on (current branch, working tree status)
raise GitError instead, since there is no sensible result to return.

No timeout is applied: a pull or push runs until git exits.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from infinity_sync.core.config.models import PullStrategy
from infinity_sync.core.git.models import GitOperation, OperationResult, WorkingTreeStatus
from infinity_sync.utils.logging import SyncLogger

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Exception raised when a git query fails."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


def _last_line(text: str | None) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""


class GitRunner:
    """
    Runs git in a project directory and reports results through a SyncLogger.

    Example:
        >>> runner = GitRunner(Path("."), SyncLogger(None), dry_run=True)
        >>> runner.pull("origin", "main").success
        True
    """

    def __init__(self, project_dir: Path, sync_logger: SyncLogger, *, dry_run: bool = False):
        """
        Initialize the runner.

        Args:
            project_dir: Root of the git repository
            sync_logger: Where user-facing events are reported
            dry_run: Log remote operations instead of running them
        """
        self.project_dir = Path(project_dir)
        self.log = sync_logger
        self.dry_run = dry_run

    def _run_git(self, args: list[str], *, check: bool = True) -> subprocess.CompletedProcess[str]:
        """
        Run a git command in the project directory.

        Args:
            args: Git command arguments (without "git" prefix).
            check: Whether to raise on non-zero exit code.

        Returns:
            The completed process with captured stdout/stderr.

        Raises:
            GitError: If git cannot be started, or the command fails and check=True.
        """
        cmd = ["git"] + args

        logger.debug("Running git command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitError("git not found in PATH", command=cmd) from e
        except OSError as e:
            raise GitError(f"Failed to run {' '.join(cmd)}: {e}", command=cmd) from e

        logger.debug("git exited with %d", result.returncode)

        if check and result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ""
            raise GitError(
                f"Git command failed: {' '.join(cmd)}",
                command=cmd,
                stderr=stderr,
            )

        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def current_branch(self) -> str:
        """
        Get the checked-out branch name.

        Returns:
            Branch name, or "" when HEAD is detached.

        Raises:
            GitError: If git fails.
        """
        return self._run_git(["branch", "--show-current"]).stdout.strip()

    def working_tree_status(self) -> WorkingTreeStatus:
        """
        Get the working tree status, listing untracked files individually.

        Raises:
            GitError: If git fails.
        """
        result = self._run_git(["status", "--porcelain", "-z", "--untracked-files=all"])
        return WorkingTreeStatus.from_porcelain_z(result.stdout)

    # -------------------------------------------------------------------------
    # Remote operations
    # -------------------------------------------------------------------------

    def fetch(self, remote: str, *, prune: bool = True) -> OperationResult:
        """Fetch from a remote, pruning stale remote-tracking refs."""
        args = ["fetch", remote]
        if prune:
            args.append("--prune")
        return self._remote_operation(GitOperation.FETCH, args, remote, None, best_effort=True)

    def pull(
        self,
        remote: str,
        branch: str,
        strategy: PullStrategy | None = None,
    ) -> OperationResult:
        """
        Pull a branch from a remote.

        Args:
            remote: Remote name
            branch: Branch name
            strategy: Merge/rebase/ff-only, or None for git's default

        Returns:
            OperationResult for the pull
        """
        self.log.info(f"⬇ Pulling changes from {remote}/{branch}...")
        args = ["pull"]
        if strategy is not None:
            args.append(strategy.pull_flag)
        args += [remote, branch]
        return self._remote_operation(GitOperation.PULL, args, remote, branch)

    def push(self, remote: str, branch: str) -> OperationResult:
        """Push a branch to a remote."""
        self.log.info(f"⬆ Pushing changes to {remote}/{branch}...")
        return self._remote_operation(GitOperation.PUSH, ["push", remote, branch], remote, branch)

    def _remote_operation(
        self,
        operation: GitOperation,
        args: list[str],
        remote: str,
        branch: str | None,
        *,
        best_effort: bool = False,
    ) -> OperationResult:
        cmd = ["git"] + args
        name = operation.value.capitalize()
        # Best-effort failures are warnings, not errors
        report_failure = self.log.warning if best_effort else self.log.error
        glyph = "⚠" if best_effort else "✗"

        if self.dry_run:
            self.log.info(f"[DRY RUN] Would execute: {' '.join(cmd)}")
            return OperationResult(
                operation=operation,
                remote=remote,
                branch=branch,
                success=True,
                dry_run=True,
                command=cmd,
                message="dry run",
            )

        try:
            result = self._run_git(args, check=False)
        except GitError as e:
            report_failure(f"{glyph} {name} failed: {e}")
            return OperationResult(
                operation=operation,
                remote=remote,
                branch=branch,
                success=False,
                command=cmd,
                message=str(e),
            )

        if result.returncode == 0:
            self.log.success(f"✓ {name} completed successfully")
            return OperationResult(
                operation=operation,
                remote=remote,
                branch=branch,
                success=True,
                exit_code=0,
                command=cmd,
            )

        detail = _last_line(result.stderr)
        message = f"{glyph} {name} failed with exit code {result.returncode}"
        if detail:
            message += f": {detail}"
        report_failure(message)
        return OperationResult(
            operation=operation,
            remote=remote,
            branch=branch,
            success=False,
            exit_code=result.returncode,
            command=cmd,
            message=detail,
        )
