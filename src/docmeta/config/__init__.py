"""Config module exports."""

from docmeta.config.loader import load_config
from docmeta.config.models import (
    CollectorConfig,
    DocMetaConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "CollectorConfig",
    "DocMetaConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
