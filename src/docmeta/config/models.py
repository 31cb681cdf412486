"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DOCMETA__SECTION__KEY)
3. Repo YAML (.docmeta.yaml at the collection root)
4. Global YAML (~/.config/docmeta/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    DOCMETA__<SECTION>__<KEY>=<VALUE>

Examples:
    DOCMETA__LOGGING__LEVEL=DEBUG
    DOCMETA__COLLECTOR__MAX_WORKERS=8
    DOCMETA__COLLECTOR__SUFFIXES='[".js", ".mjs"]'
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DOCMETA__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped comment block.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CollectorConfig(BaseModel):
    """Tree traversal configuration.

    Env vars:
        DOCMETA__COLLECTOR__SUFFIXES: Eligible source-file suffixes
        DOCMETA__COLLECTOR__MAX_WORKERS: Parallel directory/file readers
        DOCMETA__COLLECTOR__FOLLOW_SYMLINKS: Traverse symlinked entries
        DOCMETA__COLLECTOR__MAX_FILE_SIZE_MB: Skip files larger than this
    """

    suffixes: list[str] = Field(
        default_factory=lambda: [".js"],
        description="File suffixes eligible for scanning. Matched case-sensitively.",
    )
    max_workers: int = Field(
        default=4,
        description="Parallel I/O workers. Scanning itself is CPU-bound and cheap.",
    )
    ignore_dirs: list[str] = Field(
        default_factory=lambda: [".git", ".hg", ".svn", "node_modules"],
        description="Directory names never descended into. They count as skipped entries.",
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Follow symlinked files and directories. "
        "The root is always followed. RISK: loops are not detected.",
    )
    max_file_size_mb: int = Field(
        default=10,
        description="Skip eligible files larger than this (MB).",
    )

    @field_validator("suffixes")
    @classmethod
    def validate_suffixes(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one suffix is required")
        for suffix in v:
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"Suffix must look like '.ext', got {suffix!r}")
        return v

    @field_validator("max_workers", "max_file_size_mb")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be at least 1, got {v}")
        return v


class DocMetaConfig(BaseModel):
    """Root configuration for docmeta.

    All settings can be configured via:
    1. Environment variables: DOCMETA__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
