"""Concurrent collection of file metadata across a directory tree."""

from docmeta.collect.collector import (
    CollectionResult,
    CollectorEvent,
    CollectorState,
    TreeCollector,
)
from docmeta.collect.counter import WorkCounter
from docmeta.collect.fs import (
    EntryStat,
    FileSystem,
    LocalFileSystem,
    derive_namespace,
    suffix_filter,
)
from docmeta.collect.store import CollectionStore

__all__ = [
    "CollectionResult",
    "CollectionStore",
    "CollectorEvent",
    "CollectorState",
    "EntryStat",
    "FileSystem",
    "LocalFileSystem",
    "TreeCollector",
    "WorkCounter",
    "derive_namespace",
    "suffix_filter",
]
