"""
Sync orchestrator.

Runs one sync through its phases:

    PREFLIGHT -> BRANCH_RESOLUTION -> CLEANLINESS -> FETCH
        -> DISPATCH (pull | push | bidirectional) -> RECORD -> EXIT

Precondition failures (not a repository, no branch, dirty tree) raise a
SyncPreconditionError before anything touches the remote. Once a run
reaches DISPATCH it always reaches RECORD, whatever the pull or push
outcome. There is no conflict resolution and no retry: pull and push run
with git's own merge behaviour and the first failure ends the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from infinity_sync.core.config.loader import ConfigLoadResult, load_config
from infinity_sync.core.config.models import PullStrategy, SyncConfig, SyncMode
from infinity_sync.core.context import SyncContext
from infinity_sync.core.git.models import GitOperation, OperationResult
from infinity_sync.core.git.runner import GitRunner
from infinity_sync.core.status.recorder import StatusRecorder
from infinity_sync.core.sync.exceptions import (
    BranchResolutionError,
    DirtyWorkingTreeError,
    NotARepositoryError,
)
from infinity_sync.core.sync.models import SyncPhase, SyncRunResult
from infinity_sync.utils.logging import SyncLogger
from infinity_sync.utils.project import is_repository_root

logger = logging.getLogger(__name__)

MODE_BANNERS = {
    SyncMode.PULL: "📥 Mode: PULL (Remote → Local)",
    SyncMode.PUSH: "📤 Mode: PUSH (Local → Remote)",
    SyncMode.BIDIRECTIONAL: "🔄 Mode: BIDIRECTIONAL (Remote ⟷ Local)",
}


@dataclass
class RunSettings:
    """Effective options after merging CLI flags over the config file.

    Attributes:
        mode: Sync mode to dispatch on
        remote: Remote name
        branch: Branch name, or None to use the checked-out branch
        strategy: Pull strategy, or None for git's default
        dry_run: Log git operations instead of running them
        force: Sync despite uncommitted changes
    """
    mode: SyncMode
    remote: str
    branch: str | None
    strategy: PullStrategy | None
    dry_run: bool
    force: bool


class SyncOrchestrator:
    """
    Runs a sync for a SyncContext.

    Example:
        >>> context = SyncContext.create(SyncOptions(mode=SyncMode.PULL, dry_run=True))
        >>> result = SyncOrchestrator(context).run()
        >>> result.exit_code
        0
    """

    def __init__(
        self,
        context: SyncContext,
        *,
        sync_logger: SyncLogger | None = None,
        recorder: StatusRecorder | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            context: Run context (project dir, options, clock)
            sync_logger: Event sink (defaults to console + the context's log file)
            recorder: Status recorder (defaults to one writing the context's files)
        """
        self.context = context
        self.log = sync_logger or SyncLogger(context.log_file, clock=context.clock)
        self.recorder = recorder or StatusRecorder(context, self.log)
        self.config = SyncConfig()

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def check_repository(self) -> None:
        """
        Verify the project directory is a git repository root.

        Raises:
            NotARepositoryError: If no .git marker is present.
        """
        if not is_repository_root(self.context.project_dir):
            self.log.error("✗ Not a git repository. Please run from repository root.")
            raise NotARepositoryError(self.context.project_dir)
        self.log.success("✓ Git repository detected")

    def load_config(self) -> ConfigLoadResult:
        """Load the config file, reporting whether defaults are in use."""
        result = load_config(self.context.config_path, self.context.project_dir)
        shown = self._display_path(result)

        if result.loaded:
            self.log.success(f"✓ Configuration loaded from {shown}")
        elif result.error == "not found":
            self.log.warning(f"⚠ Config file not found at {shown}, using defaults")
        else:
            self.log.warning(f"⚠ Failed to load config at {shown}: {result.error}, using defaults")

        for warning in result.warnings:
            self.log.warning(f"⚠ {warning}")

        self.config = result.config
        return result

    def resolve_settings(self, config: SyncConfig) -> RunSettings:
        """Merge CLI options over the config file (CLI wins)."""
        options = self.context.options
        return RunSettings(
            mode=options.mode or config.mode,
            remote=options.remote or config.remote,
            branch=options.branch or config.branch,
            strategy=config.strategy,
            dry_run=options.dry_run or config.dry_run,
            force=options.force,
        )

    def resolve_branch(self, runner: GitRunner, branch: str | None) -> str:
        """
        Return the branch to sync, defaulting to the checked-out branch.

        Raises:
            BranchResolutionError: If no branch was given and HEAD is detached.
            GitError: If git cannot report the current branch.
        """
        if branch:
            return branch

        current = runner.current_branch()
        if not current:
            self.log.error("✗ Could not determine the current branch (detached HEAD?)")
            raise BranchResolutionError()

        self.log.info(f"→ Using current branch: {current}")
        return current

    def check_working_tree(self, runner: GitRunner, force: bool) -> bool:
        """
        Refuse to sync over uncommitted changes unless forced.

        Paths listed in exclude_paths, and the files this tool writes, do
        not count as changes.

        Returns:
            True if the tree was dirty and force overrode the check

        Raises:
            DirtyWorkingTreeError: If the tree is dirty and force is off.
            GitError: If git cannot report the status.
        """
        ignored = self.config.exclude_paths + self.context.artifact_paths()
        status = runner.working_tree_status().excluding(ignored)
        if status.is_clean:
            return False

        changed = [entry.path for entry in status.entries]
        logger.debug("Uncommitted changes: %s", changed)
        self.log.warning(f"⚠ Working tree has uncommitted changes ({len(changed)} files)")

        if not force:
            self.log.error("✗ Refusing to sync with uncommitted changes. Use --force to override.")
            raise DirtyWorkingTreeError(changed)

        self.log.warning("⚠ Forcing sync despite uncommitted changes")
        return True

    def dispatch(
        self, runner: GitRunner, settings: RunSettings, branch: str
    ) -> list[OperationResult]:
        """
        Run the pull and/or push for the selected mode.

        Returns:
            The operations that ran, in order. The run succeeded if the
            last one succeeded and, for bidirectional, the push ran at all.
        """
        self.log.info(MODE_BANNERS[settings.mode])

        if settings.mode == SyncMode.PULL:
            return [runner.pull(settings.remote, branch, settings.strategy)]

        if settings.mode == SyncMode.PUSH:
            return [self._push(runner, settings, branch)]

        pulled = runner.pull(settings.remote, branch, settings.strategy)
        if not pulled.success:
            self.log.warning("⚠ Skipping push because pull failed")
            return [pulled]
        return [pulled, self._push(runner, settings, branch)]

    def _push(self, runner: GitRunner, settings: RunSettings, branch: str) -> OperationResult:
        if not self.config.is_protected(branch):
            return runner.push(settings.remote, branch)

        if settings.dry_run:
            self.log.warning(f"⚠ {branch} is protected; a real run would refuse to push it")
            return runner.push(settings.remote, branch)

        self.log.error(f"✗ Refusing to push to protected branch {branch}")
        return OperationResult(
            operation=GitOperation.PUSH,
            remote=settings.remote,
            branch=branch,
            success=False,
            command=["git", "push", settings.remote, branch],
            message="protected branch",
        )

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run(self) -> SyncRunResult:
        """
        Execute a full sync run.

        Returns:
            SyncRunResult describing the run; exit_code is 0 iff it succeeded.

        Raises:
            SyncPreconditionError: If the run is refused before syncing.
            GitError: If a git query (branch, status) fails.
        """
        self.check_repository()
        self.load_config()
        settings = self.resolve_settings(self.config)
        logger.debug("Effective settings: %s", settings)

        runner = GitRunner(self.context.project_dir, self.log, dry_run=settings.dry_run)
        branch = self.resolve_branch(runner, settings.branch)

        result = SyncRunResult(
            mode=settings.mode,
            remote=settings.remote,
            branch=branch,
            dry_run=settings.dry_run,
            phase=SyncPhase.CLEANLINESS,
            started_at=self.context.started_at,
        )

        result.forced = self.check_working_tree(runner, settings.force)

        result.phase = SyncPhase.FETCH
        self.log.info("🔄 Fetching from remote...")
        result.fetch = runner.fetch(settings.remote)

        result.phase = SyncPhase.DISPATCH
        result.operations = self.dispatch(runner, settings, branch)
        result.success = _mode_succeeded(settings.mode, result.operations)

        result.phase = SyncPhase.RECORD
        try:
            self.recorder.record(result.success, settings.mode.label)
        except Exception as e:
            logger.debug("Recording failed", exc_info=True)
            self.log.warning(f"⚠ Could not record sync outcome: {e}")

        result.phase = SyncPhase.EXIT
        result.completed_at = self.context.now()
        if result.success:
            self.log.success("✅ SYNC COMPLETE - All operations successful!")
        else:
            self.log.error("❌ SYNC FAILED - Review logs for details")
        return result

    def _display_path(self, result: ConfigLoadResult) -> str:
        try:
            return result.path.relative_to(self.context.project_dir).as_posix()
        except ValueError:
            return str(result.path)


def _mode_succeeded(mode: SyncMode, operations: list[OperationResult]) -> bool:
    """Whether the operations a mode requires all ran and succeeded."""
    required = {
        SyncMode.PULL: [GitOperation.PULL],
        SyncMode.PUSH: [GitOperation.PUSH],
        SyncMode.BIDIRECTIONAL: [GitOperation.PULL, GitOperation.PUSH],
    }[mode]
    ran = {op.operation: op.success for op in operations}
    return all(ran.get(operation, False) for operation in required)
