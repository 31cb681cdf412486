"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() function
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from docmeta.config.loader import (
    GLOBAL_CONFIG_PATH,
    REPO_CONFIG_NAME,
    _deep_merge,
    _load_yaml,
    load_config,
)
from docmeta.config.models import CollectorConfig, LoggingConfig
from docmeta.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("collector:\n  max_workers: 2\n")

        assert _load_yaml(yaml_file) == {"collector": {"max_workers": 2}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is not a config document."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        base = {"collector": {"max_workers": 4, "suffixes": [".js"]}}
        override = {"collector": {"max_workers": 8}}

        assert _deep_merge(base, override) == {"collector": {"max_workers": 8, "suffixes": [".js"]}}

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}

        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        with patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.logging.level == "INFO"
        assert config.collector == CollectorConfig()

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        (tmp_path / REPO_CONFIG_NAME).write_text("collector:\n  suffixes: ['.mjs']\n")

        with patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)

        assert config.collector.suffixes == [".mjs"]

    def test_repo_config_overrides_global(self, tmp_path: Path) -> None:
        """Repo YAML wins over global YAML key by key."""
        global_file = tmp_path / "global.yaml"
        global_file.write_text("collector:\n  max_workers: 2\n  follow_symlinks: true\n")
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / REPO_CONFIG_NAME).write_text("collector:\n  max_workers: 6\n")

        with patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(repo)

        assert config.collector.max_workers == 6
        assert config.collector.follow_symlinks is True

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        (tmp_path / REPO_CONFIG_NAME).write_text("logging:\n  level: INFO\n")

        with (
            patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"DOCMETA__LOGGING__LEVEL": "WARNING"}),
        ):
            config = load_config(tmp_path)

        assert config.logging.level == "WARNING"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        with patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path, logging=LoggingConfig(level="ERROR"))

        assert config.logging.level == "ERROR"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / REPO_CONFIG_NAME).write_text("collector:\n  max_workers: 0\n")

        with (
            patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "collector.max_workers"

    def test_file_root_ignores_repo_config(self, tmp_path: Path) -> None:
        """A single-file root has no repo config beside it."""
        source = tmp_path / "widget.js"
        source.write_text("")

        with patch("docmeta.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(source)

        assert config.collector.max_workers == 4


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "docmeta" in str(GLOBAL_CONFIG_PATH)
