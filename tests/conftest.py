"""
Pytest configuration and shared fixtures.

Provides temporary git repositories wired to a local bare remote, a fixed
clock, and a quiet console for orchestrator tests.
"""

import io
import subprocess
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from infinity_sync.core.context import SyncContext, SyncOptions
from infinity_sync.core.sync import SyncOrchestrator
from infinity_sync.utils.logging import SyncLogger

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0)


def git(repo: Path, *args: str) -> str:
    """Run a git command in repo and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def configure_identity(repo: Path) -> None:
    """Configure a local git identity so commits work in CI."""
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "pull.rebase", "false")


def commit_file(repo: Path, name: str, content: str, message: str | None = None) -> str:
    """Write, stage and commit a file. Returns the new HEAD sha."""
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-m", message or f"Update {name}")
    return git(repo, "rev-parse", "HEAD")


# ==============================================================================
# Repository Fixtures
# ==============================================================================


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """Create a bare repository to act as the remote."""
    remote = tmp_path / "remote.git"
    subprocess.run(
        ["git", "init", "--bare", str(remote)],
        capture_output=True,
        check=True,
    )
    return remote


@pytest.fixture
def git_repo(tmp_path: Path, remote_repo: Path) -> Path:
    """
    Create a repository on branch main, tracking origin/main on the bare remote.
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    configure_identity(repo)

    commit_file(repo, "README.md", "# Test Repo\n", "Initial commit")
    git(repo, "branch", "-M", "main")
    git(repo, "remote", "add", "origin", str(remote_repo))
    git(repo, "push", "-u", "origin", "main")

    return repo


@pytest.fixture
def state_repo(git_repo: Path) -> Path:
    """A repository with an (empty, so untracked-invisible) .infinity/ directory."""
    (git_repo / ".infinity").mkdir()
    return git_repo


@pytest.fixture
def other_clone(tmp_path: Path, remote_repo: Path, git_repo: Path) -> Path:
    """A second clone of the remote, for creating upstream changes."""
    clone = tmp_path / "other"
    subprocess.run(
        ["git", "clone", str(remote_repo), str(clone)],
        capture_output=True,
        check=True,
    )
    configure_identity(clone)
    git(clone, "checkout", "main")
    return clone


# ==============================================================================
# Orchestrator Fixtures
# ==============================================================================


@pytest.fixture
def quiet_console() -> Console:
    """A console that writes to memory instead of the terminal."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def make_orchestrator(quiet_console: Console):
    """Factory building an orchestrator for a repo with a fixed clock."""

    def _make(repo: Path, **options) -> SyncOrchestrator:
        context = SyncContext.create(
            SyncOptions(**options),
            project_dir=repo,
            clock=lambda: FIXED_NOW,
        )
        sync_logger = SyncLogger(context.log_file, console=quiet_console, clock=context.clock)
        return SyncOrchestrator(context, sync_logger=sync_logger)

    return _make
