"""
Tests for configuration loading.

Tests cover:
- Missing, invalid and valid config files
- Fallback to defaults
- Environment variable overrides
- Layered .env loading
"""

import json
import os
from pathlib import Path

import pytest

from infinity_sync.core.config import (
    DEFAULT_CONFIG_PATH,
    PullStrategy,
    SyncConfig,
    SyncMode,
    apply_env_overrides,
    get_config_path,
    load_config,
    load_layered_env,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove INFINITY_SYNC_* variables before and after each test.

    load_layered_env writes os.environ directly, so monkeypatch alone
    would not undo what a test loaded.
    """
    for key in list(os.environ):
        if key.startswith("INFINITY_SYNC_"):
            monkeypatch.delenv(key)
    yield
    for key in list(os.environ):
        if key.startswith("INFINITY_SYNC_"):
            del os.environ[key]


def write_config(project: Path, data) -> Path:
    path = project / ".infinity" / "sync-config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


class TestSyncConfigModel:
    def test_defaults(self) -> None:
        config = SyncConfig()
        assert config.mode == SyncMode.BIDIRECTIONAL
        assert config.remote == "origin"
        assert config.branch is None
        assert config.strategy is None
        assert config.protected_branches == []
        assert config.exclude_paths == []
        assert config.dry_run is False

    def test_mode_is_case_insensitive(self) -> None:
        assert SyncConfig(mode="PULL").mode == SyncMode.PULL
        assert SyncConfig(strategy="Rebase").strategy == PullStrategy.REBASE

    def test_blank_branch_means_current(self) -> None:
        assert SyncConfig(branch="  ").branch is None

    def test_exclude_paths_normalized(self) -> None:
        config = SyncConfig(exclude_paths=["./build/", "docs", "", "./"])
        assert config.exclude_paths == ["build", "docs"]

    def test_unknown_keys_ignored(self) -> None:
        config = SyncConfig.model_validate({"remote": "upstream", "conflict_resolution": "ours"})
        assert config.remote == "upstream"

    def test_is_protected(self) -> None:
        config = SyncConfig(protected_branches=["main", "release"])
        assert config.is_protected("main")
        assert not config.is_protected("feature")

    def test_strategy_pull_flags(self) -> None:
        assert PullStrategy.MERGE.pull_flag == "--no-rebase"
        assert PullStrategy.REBASE.pull_flag == "--rebase"
        assert PullStrategy.FF_ONLY.pull_flag == "--ff-only"


class TestGetConfigPath:
    def test_default_path_relative_to_project(self, tmp_path: Path) -> None:
        assert get_config_path(None, tmp_path) == tmp_path / DEFAULT_CONFIG_PATH

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "elsewhere.json"
        assert get_config_path(path, tmp_path / "project") == path


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        result = load_config(project_dir=tmp_path)

        assert result.loaded is False
        assert result.error == "not found"
        assert result.config == SyncConfig()

    def test_valid_file_is_loaded(self, tmp_path: Path) -> None:
        write_config(tmp_path, {
            "mode": "pull",
            "remote": "upstream",
            "strategy": "ff-only",
            "protected_branches": ["main"],
            "exclude_paths": ["build/"],
        })

        result = load_config(project_dir=tmp_path)

        assert result.loaded is True
        assert result.error is None
        assert result.config.mode == SyncMode.PULL
        assert result.config.remote == "upstream"
        assert result.config.strategy == PullStrategy.FF_ONLY
        assert result.config.protected_branches == ["main"]
        assert result.config.exclude_paths == ["build"]

    def test_invalid_json_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / ".infinity" / "sync-config.json"
        path.parent.mkdir()
        path.write_text("{not json")

        result = load_config(project_dir=tmp_path)

        assert result.loaded is False
        assert result.error
        assert result.config == SyncConfig()

    def test_non_object_json_falls_back(self, tmp_path: Path) -> None:
        write_config(tmp_path, ["pull"])

        result = load_config(project_dir=tmp_path)

        assert result.loaded is False
        assert "JSON object" in result.error

    def test_invalid_values_fall_back(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"mode": "sideways", "remote": "upstream"})

        result = load_config(project_dir=tmp_path)

        assert result.loaded is False
        assert "invalid configuration" in result.error
        assert result.config.mode == SyncMode.BIDIRECTIONAL
        assert result.config.remote == "origin"

    def test_custom_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"remote": "backup"}))

        result = load_config(Path("custom.json"), project_dir=tmp_path)

        assert result.loaded is True
        assert result.path == path
        assert result.config.remote == "backup"


class TestEnvOverrides:
    def test_no_env_leaves_dict_unchanged(self) -> None:
        result, warnings = apply_env_overrides({"remote": "origin"})
        assert result == {"remote": "origin"}
        assert warnings == []

    def test_mode_and_remote_override_file(self, tmp_path: Path, monkeypatch) -> None:
        write_config(tmp_path, {"mode": "pull", "remote": "upstream"})
        monkeypatch.setenv("INFINITY_SYNC_MODE", "PUSH")
        monkeypatch.setenv("INFINITY_SYNC_REMOTE", "mirror")

        config = load_config(project_dir=tmp_path).config

        assert config.mode == SyncMode.PUSH
        assert config.remote == "mirror"

    def test_invalid_mode_override_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("INFINITY_SYNC_MODE", "sideways")

        result, warnings = apply_env_overrides({"mode": "pull"})

        assert result["mode"] == "pull"
        assert len(warnings) == 1
        assert "INFINITY_SYNC_MODE" in warnings[0]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1", True), ("true", True), ("false", False), ("0", False), ("", False)],
    )
    def test_dry_run_override(self, monkeypatch, value: str, expected: bool) -> None:
        monkeypatch.setenv("INFINITY_SYNC_DRY_RUN", value)
        result, _ = apply_env_overrides({})
        assert result["dry_run"] is expected

    def test_env_kept_when_file_invalid(self, tmp_path: Path, monkeypatch) -> None:
        write_config(tmp_path, {"mode": "sideways"})
        monkeypatch.setenv("INFINITY_SYNC_REMOTE", "mirror")

        result = load_config(project_dir=tmp_path)

        assert result.loaded is False
        assert result.config.remote == "mirror"


class TestLayeredEnv:
    def test_project_env_sets_missing_vars(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("INFINITY_SYNC_REMOTE=from-project\n")

        loaded = load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert os.environ["INFINITY_SYNC_REMOTE"] == "from-project"
        assert "INFINITY_SYNC_REMOTE" in loaded

    def test_os_env_wins_over_env_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("INFINITY_SYNC_REMOTE", "from-shell")
        (tmp_path / ".env").write_text("INFINITY_SYNC_REMOTE=from-project\n")

        load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert os.environ["INFINITY_SYNC_REMOTE"] == "from-shell"

    def test_project_env_overrides_user_env(self, tmp_path: Path) -> None:
        user_env = tmp_path / "user.env"
        user_env.write_text("INFINITY_SYNC_MODE=push\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / ".env").write_text("INFINITY_SYNC_MODE=pull\n")

        load_layered_env(project_dir=project, user_env_paths=[user_env])

        assert os.environ["INFINITY_SYNC_MODE"] == "pull"

    def test_only_prefixed_keys_are_loaded(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        (tmp_path / ".env").write_text(
            "DATABASE_URL=postgres://localhost/app\nINFINITY_SYNC_MODE=pull\n"
        )

        loaded = load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert loaded == {"INFINITY_SYNC_MODE"}
        assert "DATABASE_URL" not in os.environ

    def test_env_local_overrides_env(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("INFINITY_SYNC_REMOTE=shared\n")
        (tmp_path / ".env.local").write_text("INFINITY_SYNC_REMOTE=mine\n")

        load_layered_env(project_dir=tmp_path, user_env_paths=[])

        assert os.environ["INFINITY_SYNC_REMOTE"] == "mine"
