"""
Configuration loading with layered overrides.

Implements the configuration precedence chain:
    defaults < config file < env vars

Command-line flags sit above all of these and are applied by the
orchestrator. Loading is never fatal: a missing, unparsable or invalid
file falls back to the built-in defaults and the reason is reported.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import SyncConfig, SyncMode

DEFAULT_CONFIG_PATH = Path(".infinity") / "sync-config.json"


@dataclass
class ConfigLoadResult:
    """Outcome of a config load.

    Attributes:
        config: The usable configuration (defaults when loading failed)
        path: The path that was read
        loaded: True if the file existed and validated
        error: Why the file could not be used, if it was not
        warnings: Non-fatal problems with environment overrides
    """
    config: SyncConfig
    path: Path
    loaded: bool
    error: str | None = None
    warnings: list[str] = field(default_factory=list)


def get_config_path(config_path: Path | None = None, project_dir: Path | None = None) -> Path:
    """
    Resolve the config file path.

    Args:
        config_path: Explicit path (absolute, or relative to project_dir)
        project_dir: Project root (defaults to current directory)

    Returns:
        Absolute path to the config file
    """
    if project_dir is None:
        project_dir = Path.cwd()
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.is_absolute():
        path = project_dir / path
    return path


def load_json_file(path: Path) -> dict[str, Any]:
    """
    Load a JSON object from a file.

    Unlike a silent loader, this raises so the caller can report why the
    file was rejected.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON object

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not a JSON object
        OSError: If the file cannot be read
    """
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def apply_env_overrides(config_dict: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        INFINITY_SYNC_MODE - overrides mode
        INFINITY_SYNC_REMOTE - overrides remote
        INFINITY_SYNC_DRY_RUN - overrides dry_run

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Tuple of (overridden dictionary, warnings for ignored values)
    """
    result = config_dict.copy()
    warnings: list[str] = []

    if mode_str := os.environ.get("INFINITY_SYNC_MODE"):
        try:
            result["mode"] = SyncMode(mode_str.strip().lower()).value
        except ValueError:
            warnings.append(f"Invalid INFINITY_SYNC_MODE value '{mode_str}', ignoring")

    if remote := os.environ.get("INFINITY_SYNC_REMOTE", "").strip():
        result["remote"] = remote

    if (dry_run_str := os.environ.get("INFINITY_SYNC_DRY_RUN")) is not None:
        result["dry_run"] = dry_run_str.strip().lower() not in ("false", "0", "")

    return result, warnings


def load_config(
    config_path: Path | None = None,
    project_dir: Path | None = None,
) -> ConfigLoadResult:
    """
    Load sync configuration.

    Configuration precedence (highest to lowest):
        1. Environment variables (INFINITY_SYNC_*)
        2. Config file (.infinity/sync-config.json)
        3. Hardcoded defaults

    Args:
        config_path: Path to the config file (defaults to .infinity/sync-config.json)
        project_dir: Project root used to resolve relative paths

    Returns:
        ConfigLoadResult with a validated SyncConfig

    Example:
        >>> result = load_config()
        >>> result.config.remote
        'origin'
        >>> result.loaded
        False
    """
    path = get_config_path(config_path, project_dir)

    file_config: dict[str, Any] = {}
    error: str | None = None
    try:
        file_config = load_json_file(path)
    except FileNotFoundError:
        error = "not found"
    except (json.JSONDecodeError, ValueError, OSError) as e:
        error = str(e)

    merged, warnings = apply_env_overrides(file_config)

    try:
        config = SyncConfig.model_validate(merged)
    except ValidationError as e:
        if error is None:
            error = f"invalid configuration ({e.error_count()} errors)"
        # Keep env overrides even if the file itself is invalid
        env_only, _ = apply_env_overrides({})
        try:
            config = SyncConfig.model_validate(env_only)
        except ValidationError:
            config = SyncConfig()
        return ConfigLoadResult(
            config=config,
            path=path,
            loaded=False,
            error=error,
            warnings=warnings,
        )

    return ConfigLoadResult(
        config=config,
        path=path,
        loaded=error is None,
        error=error,
        warnings=warnings,
    )
