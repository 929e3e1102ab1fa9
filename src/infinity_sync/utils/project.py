"""
Repository root discovery utilities for infinity-sync.

A sync runs from the repository root; these helpers check for the
version-control marker and locate the root from nested directories.
"""

from pathlib import Path

# Markers that indicate a repository root
REPO_ROOT_MARKERS = [
    ".git",  # Git repository (directory, or file in worktrees/submodules)
]


def is_repository_root(path: Path | None = None) -> bool:
    """
    Check whether a directory is a repository root.

    Only the directory itself is checked; parents are not searched.

    Args:
        path: Directory to check. Defaults to current working directory.

    Returns:
        True if a root marker exists in the directory.
    """
    if path is None:
        path = Path.cwd()
    return any((path / marker).exists() for marker in REPO_ROOT_MARKERS)


def find_repository_root(start: Path | None = None) -> Path | None:
    """
    Find the repository root by searching upward for a marker.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the repository root, or None if not found.

    Example:
        >>> find_repository_root(Path("/project/src/module"))
        PosixPath('/project')
    """
    if start is None:
        start = Path.cwd()

    current = start.resolve()
    while True:
        if is_repository_root(current):
            return current
        if current == current.parent:  # Filesystem root
            return None
        current = current.parent
