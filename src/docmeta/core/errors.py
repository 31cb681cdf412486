"""docmeta error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extraction (annotations, comment blocks)
- 4xxx: Collection (tree traversal, filesystem)
- 9xxx: Internal

Parsing-level errors are recovered locally and attached to the record they
concern. Collection errors are reported per branch and never abort sibling
branches.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Extraction (3xxx)
    MALFORMED_ANNOTATION = 3001
    UNTERMINATED_COMMENT = 3002

    # Collection (4xxx)
    ROOT_NOT_FOUND = 4001
    DIRECTORY_UNREADABLE = 4002
    FILE_UNREADABLE = 4003
    NAMESPACE_COLLISION = 4004
    ALREADY_STARTED = 4005
    TIMEOUT = 4006
    FILE_TOO_LARGE = 4007

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class DocMetaError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNTERMINATED_COMMENT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(DocMetaError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class AnnotationError(DocMetaError):
    """A phrase looked like an annotation but carried no usable name."""

    @classmethod
    def malformed(cls, phrase: str) -> "AnnotationError":
        return cls(
            code=ErrorCode.MALFORMED_ANNOTATION,
            message=f"No annotation name in phrase: {phrase.strip()!r}",
            details={"phrase": phrase},
        )


class CommentError(DocMetaError):
    """Comment block delimiting errors."""

    @classmethod
    def unterminated(cls, offset: int, file_name: str = "") -> "CommentError":
        where = f" in {file_name}" if file_name else ""
        return cls(
            code=ErrorCode.UNTERMINATED_COMMENT,
            message=f"Comment opened at offset {offset}{where} is never closed",
            details={"offset": offset, "file_name": file_name},
        )

    def for_file(self, file_name: str) -> "CommentError":
        """Return a copy of this error attributed to a file."""
        return CommentError.unterminated(int(self.details.get("offset", -1)), file_name)


class CollectError(DocMetaError):
    """Tree traversal and filesystem errors."""

    @classmethod
    def root_not_found(cls, path: str) -> "CollectError":
        return cls(
            code=ErrorCode.ROOT_NOT_FOUND,
            message=f"Collection root not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unreadable_directory(cls, path: str, reason: str) -> "CollectError":
        return cls(
            code=ErrorCode.DIRECTORY_UNREADABLE,
            message=f"Cannot list directory {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def unreadable_file(cls, path: str, reason: str) -> "CollectError":
        return cls(
            code=ErrorCode.FILE_UNREADABLE,
            message=f"Cannot read file {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def file_too_large(cls, path: str, size: int, limit: int) -> "CollectError":
        return cls(
            code=ErrorCode.FILE_TOO_LARGE,
            message=f"Skipped {path}: {size} bytes exceeds the {limit} byte limit",
            details={"path": path, "size": size, "limit": limit},
        )

    @classmethod
    def namespace_collision(cls, namespace: str, path: str) -> "CollectError":
        return cls(
            code=ErrorCode.NAMESPACE_COLLISION,
            message=f"Namespace '{namespace}' already collected; ignoring {path}",
            details={"namespace": namespace, "path": path},
        )

    @classmethod
    def already_started(cls, state: str) -> "CollectError":
        return cls(
            code=ErrorCode.ALREADY_STARTED,
            message=f"Collector cannot begin from state '{state}'",
            details={"state": state},
        )

    @classmethod
    def timeout(cls, seconds: float) -> "CollectError":
        return cls(
            code=ErrorCode.TIMEOUT,
            message=f"Traversal did not finish within {seconds}s",
            retryable=True,
            details={"timeout_sec": seconds},
        )


class InternalError(DocMetaError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
