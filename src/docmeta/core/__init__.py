"""Core utilities: errors and logging."""

from docmeta.core.errors import (
    AnnotationError,
    CollectError,
    CommentError,
    ConfigError,
    DocMetaError,
    ErrorCode,
    InternalError,
)
from docmeta.core.logging import configure_logging, get_logger

__all__ = [
    "AnnotationError",
    "CollectError",
    "CommentError",
    "ConfigError",
    "DocMetaError",
    "ErrorCode",
    "InternalError",
    "configure_logging",
    "get_logger",
]
