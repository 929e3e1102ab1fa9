"""
Configuration models and loading.

This module provides Pydantic models for sync configuration with
layered overrides: defaults < config file < env vars.
"""

from .env import load_layered_env
from .loader import (
    DEFAULT_CONFIG_PATH,
    ConfigLoadResult,
    apply_env_overrides,
    get_config_path,
    load_config,
)
from .models import PullStrategy, SyncConfig, SyncMode

__all__ = [
    # Models
    "PullStrategy",
    "SyncConfig",
    "SyncMode",
    # Loader functions
    "DEFAULT_CONFIG_PATH",
    "ConfigLoadResult",
    "apply_env_overrides",
    "get_config_path",
    "load_config",
    "load_layered_env",
]
