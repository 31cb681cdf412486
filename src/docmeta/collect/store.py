"""Append-only store of collected file metadata, keyed by namespace."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import Any

from docmeta.extract.models import FileMetadata


class CollectionStore:
    """Namespace -> FileMetadata, in insertion order.

    Entries are written once by the branch that parsed the file and never
    replaced or removed. Inserts from concurrent branches are serialized.
    """

    def __init__(self, root: str) -> None:
        self.root = root
        self._entries: dict[str, FileMetadata] = {}
        self._lock = threading.Lock()

    def add(self, namespace: str, metadata: FileMetadata) -> bool:
        """Insert a new entry. Returns False if the namespace is taken."""
        with self._lock:
            if namespace in self._entries:
                return False
            self._entries[namespace] = metadata
            return True

    def namespaces(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def get(self, namespace: str) -> FileMetadata | None:
        with self._lock:
            return self._entries.get(namespace)

    def class_metadata(self, namespace: str) -> FileMetadata:
        """Metadata for a namespace. Raises KeyError if it was not collected."""
        with self._lock:
            return self._entries[namespace]

    def items(self) -> list[tuple[str, FileMetadata]]:
        with self._lock:
            return list(self._entries.items())

    def __contains__(self, namespace: object) -> bool:
        with self._lock:
            return namespace in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.namespaces())

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "files": {namespace: metadata.to_dict() for namespace, metadata in self.items()},
        }
