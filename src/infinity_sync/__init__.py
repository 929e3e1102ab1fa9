"""
Infinity Sync - Repository Sync Protocol

A CLI tool that keeps a local git checkout in step with its remote by
running fetch, pull and push in sequence and recording every run.
"""

__version__ = "1.0.0"

# Re-export core models for convenience
from infinity_sync.core.config.models import PullStrategy, SyncConfig, SyncMode
from infinity_sync.core.sync.models import SyncRunResult

__all__ = ["PullStrategy", "SyncConfig", "SyncMode", "SyncRunResult", "__version__"]
