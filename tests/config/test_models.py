"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- CollectorConfig model
- DocMetaConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from docmeta.config.models import (
    CollectorConfig,
    DocMetaConfig,
    LoggingConfig,
    LogOutputConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_console_destinations(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_absolute_file_destination(self) -> None:
        config = LogOutputConfig(destination="/var/log/docmeta.log")
        assert config.destination == "/var/log/docmeta.log"

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/docmeta.log")

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestCollectorConfig:
    """Tests for CollectorConfig model."""

    def test_defaults(self) -> None:
        config = CollectorConfig()
        assert config.suffixes == [".js"]
        assert config.max_workers == 4
        assert "node_modules" in config.ignore_dirs
        assert ".git" in config.ignore_dirs
        assert config.follow_symlinks is False
        assert config.max_file_size_mb == 10

    def test_custom_suffixes(self) -> None:
        config = CollectorConfig(suffixes=[".js", ".mjs"])
        assert config.suffixes == [".js", ".mjs"]

    def test_empty_suffixes_rejected(self) -> None:
        with pytest.raises(ValidationError, match="At least one suffix"):
            CollectorConfig(suffixes=[])

    @pytest.mark.parametrize("suffix", ["js", ".", ""])
    def test_malformed_suffix_rejected(self, suffix: str) -> None:
        with pytest.raises(ValidationError, match="Suffix must look like"):
            CollectorConfig(suffixes=[suffix])

    @pytest.mark.parametrize("field", ["max_workers", "max_file_size_mb"])
    def test_non_positive_limits_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError, match="at least 1"):
            CollectorConfig(**{field: 0})


class TestDocMetaConfig:
    """Tests for DocMetaConfig root model."""

    def test_defaults(self) -> None:
        config = DocMetaConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.collector, CollectorConfig)

    def test_nested_dict_input(self) -> None:
        config = DocMetaConfig.model_validate(
            {"collector": {"max_workers": 2}, "logging": {"level": "DEBUG"}}
        )
        assert config.collector.max_workers == 2
        assert config.logging.level == "DEBUG"
