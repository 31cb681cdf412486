"""Filesystem access used by the tree collector.

The collector only talks to a FileSystem; LocalFileSystem is the default.
All methods raise OSError on failure and are called from worker threads.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class EntryStat:
    is_file: bool
    is_directory: bool
    size: int = 0


@runtime_checkable
class FileSystem(Protocol):
    def list_directory(self, path: str) -> list[str]:
        """Entry names of a directory."""
        ...

    def stat_entry(self, path: str, *, follow_symlinks: bool | None = None) -> EntryStat:
        """Entry type and size. follow_symlinks=None uses the filesystem default."""
        ...

    def read_file_text(self, path: str) -> str: ...


class LocalFileSystem:
    """FileSystem over the local disk."""

    def __init__(self, *, follow_symlinks: bool = False, encoding: str = "utf-8") -> None:
        self.follow_symlinks = follow_symlinks
        self.encoding = encoding

    def list_directory(self, path: str) -> list[str]:
        return sorted(os.listdir(path))

    def stat_entry(self, path: str, *, follow_symlinks: bool | None = None) -> EntryStat:
        if follow_symlinks is None:
            follow_symlinks = self.follow_symlinks
        result = os.stat(path, follow_symlinks=follow_symlinks)
        return EntryStat(
            is_file=stat.S_ISREG(result.st_mode),
            is_directory=stat.S_ISDIR(result.st_mode),
            size=result.st_size,
        )

    def read_file_text(self, path: str) -> str:
        # Undecodable bytes must not cost the whole file
        return Path(path).read_text(encoding=self.encoding, errors="replace")


def suffix_filter(suffixes: Iterable[str]) -> Callable[[str], bool]:
    """Eligibility predicate matching file names by suffix."""
    allowed = tuple(suffixes)

    def is_eligible(file_name: str) -> bool:
        return file_name.endswith(allowed)

    return is_eligible


def derive_namespace(root: str, path: str) -> str:
    """Store key for ``path``: POSIX path relative to ``root``, suffix removed.

    When the root is the file itself, the namespace is the file's stem.
    """
    relative = PurePath(os.path.relpath(path, root))
    if relative == PurePath("."):
        return PurePath(path).stem
    return relative.with_suffix("").as_posix()
