"""Environment loading helpers.

INFINITY_SYNC_* overrides may live in .env files as well as in the shell:
- OS environment (highest precedence)
- Project environment files (.env, .env.local)
- User environment file (~/.config/infinity-sync/.env)

Only INFINITY_SYNC_* keys are taken from .env files. A project .env often
holds settings for other tools, and those stay out of this process. A .env
file never overrides a variable already present in the process environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

ENV_PREFIX = "INFINITY_SYNC_"


def read_sync_env(path: Path) -> dict[str, str]:
    """Return the INFINITY_SYNC_* assignments in one .env file."""
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key and key.startswith(ENV_PREFIX) and value is not None
    }


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> set[str]:
    """Export INFINITY_SYNC_* variables from user + project .env files.

    Files are applied in order, user files first, so a later file wins
    over an earlier one. Variables set by the shell are never replaced.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        Names of the variables that were set from .env files
    """
    if project_dir is None:
        project_dir = Path.cwd()

    if user_env_paths is None:
        xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        user_env_paths = [xdg_home / "infinity-sync" / ".env"]

    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    merged: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        merged.update(read_sync_env(Path(path)))

    loaded = {key for key in merged if key not in os.environ}
    for key in loaded:
        os.environ[key] = merged[key]
    return loaded
