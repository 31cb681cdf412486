"""Concurrent tree collector.

Walks a root path, scans every eligible file and gathers the results in a
CollectionStore keyed by namespace.

Design:
- Every path is one unit of work, run on a ThreadPoolExecutor
- The number of units is unknown upfront; a WorkCounter tracks the
  outstanding ones. A directory adds its N children before retiring itself,
  and only then dispatches them
- The unit whose retirement brings the counter to zero finishes the
  traversal, so COMPLETE fires exactly once and after every FILE_PARSED
- I/O errors are reported per branch; siblings carry on
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path, PurePath
from typing import Any
from uuid import uuid4

import structlog

from docmeta.collect.counter import WorkCounter
from docmeta.collect.fs import EntryStat, FileSystem, LocalFileSystem, derive_namespace, suffix_filter
from docmeta.collect.store import CollectionStore
from docmeta.config.models import CollectorConfig
from docmeta.core.errors import CollectError, DocMetaError, InternalError
from docmeta.extract.scanner import DeclarationScanner

log = structlog.get_logger(__name__)

Handler = Callable[..., Any]


class CollectorEvent(StrEnum):
    """Notifications emitted during a traversal.

    FILE_PARSED(metadata, namespace), COMPLETE(store), ERROR(error).
    Handlers run on worker threads.
    """

    FILE_PARSED = "file_parsed"
    COMPLETE = "complete"
    ERROR = "error"


class CollectorState(StrEnum):
    """Traversal lifecycle. The last three are terminal."""

    IDLE = "idle"
    TRAVERSING = "traversing"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class CollectionResult:
    """Outcome of one traversal."""

    state: CollectorState
    store: CollectionStore
    errors: list[DocMetaError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is CollectorState.COMPLETE and not self.errors


class TreeCollector:
    """Collects FileMetadata for every eligible file under a root path."""

    def __init__(
        self,
        *,
        config: CollectorConfig | None = None,
        fs: FileSystem | None = None,
        scanner: DeclarationScanner | None = None,
        is_eligible: Callable[[str], bool] | None = None,
    ) -> None:
        self.config = config or CollectorConfig()
        self.fs = fs or LocalFileSystem(follow_symlinks=self.config.follow_symlinks)
        self.scanner = scanner or DeclarationScanner()
        self.is_eligible = is_eligible or suffix_filter(self.config.suffixes)
        self.root = ""

        self._ignore_dirs = frozenset(self.config.ignore_dirs)
        self._max_file_bytes = self.config.max_file_size_mb * 1024 * 1024
        self._handlers: dict[CollectorEvent, list[Handler]] = {event: [] for event in CollectorEvent}

        self._lock = threading.Lock()
        self._state = CollectorState.IDLE
        self._errors: list[DocMetaError] = []
        self._root_failed = False
        self._cancelled = threading.Event()
        self._finished = threading.Event()

        self._store: CollectionStore | None = None
        self._counter: WorkCounter | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._log = log

    # -- public API ----------------------------------------------------------

    def on(self, event: CollectorEvent | str, handler: Handler) -> None:
        """Register a handler. Register before begin() to see every event."""
        with self._lock:
            self._handlers[CollectorEvent(event)].append(handler)

    def begin(self, root: str | Path) -> None:
        """Start traversing ``root`` in the background."""
        with self._lock:
            if self._state is not CollectorState.IDLE:
                raise CollectError.already_started(self._state.value)
            self._state = CollectorState.TRAVERSING

        self.root = os.fspath(root)
        self._store = CollectionStore(self.root)
        self._counter = WorkCounter(1)
        self._executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="docmeta-collector",
        )
        self._log = log.bind(root=self.root, traversal=uuid4().hex[:12])
        self._log.info("traversal_started", max_workers=self.config.max_workers)
        self._executor.submit(self._visit, self.root)

    def wait(self, timeout: float | None = None) -> CollectionResult:
        """Block until the traversal reaches a terminal state."""
        if self.state is CollectorState.IDLE:
            raise InternalError.unexpected("wait() called before begin()")
        if not self._finished.wait(timeout):
            raise CollectError.timeout(timeout or 0.0)
        return self.result()

    def collect(self, root: str | Path, timeout: float | None = None) -> CollectionResult:
        """Traverse ``root`` and block until done."""
        self.begin(root)
        return self.wait(timeout)

    def cancel(self) -> None:
        """Stop dispatching new work. Reads already in flight drain."""
        self._cancelled.set()
        self._log.info("traversal_cancel_requested")

    def result(self) -> CollectionResult:
        with self._lock:
            return CollectionResult(
                state=self._state,
                store=self.store,
                errors=list(self._errors),
            )

    @property
    def state(self) -> CollectorState:
        with self._lock:
            return self._state

    @property
    def store(self) -> CollectionStore:
        if self._store is None:
            raise InternalError.unexpected("no traversal has begun")
        return self._store

    @property
    def errors(self) -> list[DocMetaError]:
        with self._lock:
            return list(self._errors)

    # -- units of work -------------------------------------------------------

    def _visit(self, path: str) -> None:
        children: list[str] = []
        try:
            children = self._process(path)
        except DocMetaError as e:
            self._fail_unit(path, e)
        except Exception as e:
            self._log.exception("unit_crashed", path=path)
            self._fail_unit(path, InternalError.unexpected(str(e), path=path))
        finally:
            self._retire()

        for child in children:
            self._dispatch(child)

    def _process(self, path: str) -> list[str]:
        """Do the I/O for one path. Returns children still to dispatch."""
        entry = self._stat(path)
        if entry.is_directory:
            return self._expand(path)
        if entry.is_file and self.is_eligible(os.path.basename(path)):
            self._parse_file(path, entry)
        else:
            self._log.debug("entry_skipped", path=path)
        return []

    def _stat(self, path: str) -> EntryStat:
        # A symlinked root is always followed
        follow = True if path == self.root else None
        try:
            return self.fs.stat_entry(path, follow_symlinks=follow)
        except FileNotFoundError as e:
            if path == self.root:
                raise CollectError.root_not_found(path) from e
            raise CollectError.unreadable_file(path, str(e)) from e
        except OSError as e:
            if path == self.root:
                raise CollectError.unreadable_directory(path, str(e)) from e
            raise CollectError.unreadable_file(path, str(e)) from e

    def _expand(self, path: str) -> list[str]:
        try:
            names = self.fs.list_directory(path)
        except OSError as e:
            raise CollectError.unreadable_directory(path, str(e)) from e

        children = [os.path.join(path, name) for name in names if name not in self._ignore_dirs]
        # Count the children before this directory retires and before any is dispatched
        self._require_counter().add(len(children))
        self._log.debug("directory_expanded", path=path, children=len(children))
        return children

    def _parse_file(self, path: str, entry: EntryStat) -> None:
        if entry.size > self._max_file_bytes:
            raise CollectError.file_too_large(path, entry.size, self._max_file_bytes)

        try:
            text = self.fs.read_file_text(path)
        except OSError as e:
            raise CollectError.unreadable_file(path, str(e)) from e

        namespace = derive_namespace(self.root, path)
        metadata = self.scanner.scan(text, file_name=self._relative_name(path))
        if not self.store.add(namespace, metadata):
            raise CollectError.namespace_collision(namespace, path)

        self._log.debug(
            "file_parsed",
            namespace=namespace,
            methods=len(metadata.methods),
            properties=len(metadata.properties),
        )
        self._emit(CollectorEvent.FILE_PARSED, metadata, namespace)

    def _relative_name(self, path: str) -> str:
        relative = os.path.relpath(path, self.root)
        if relative == ".":
            return os.path.basename(path)
        return PurePath(relative).as_posix()

    # -- bookkeeping -----------------------------------------------------------

    def _dispatch(self, path: str) -> None:
        if self._cancelled.is_set():
            self._retire()
            return
        executor = self._executor
        if executor is None:
            raise InternalError.unexpected("dispatch without executor", path=path)
        executor.submit(self._visit, path)

    def _retire(self) -> None:
        if self._require_counter().done():
            self._finish()

    def _require_counter(self) -> WorkCounter:
        if self._counter is None:
            raise InternalError.unexpected("no traversal has begun")
        return self._counter

    def _fail_unit(self, path: str, error: DocMetaError) -> None:
        if path == self.root:
            self._root_failed = True
        self._report(error)

    def _report(self, error: DocMetaError) -> None:
        with self._lock:
            self._errors.append(error)
        self._log.warning(error.error_name.lower(), **error.details)
        self._emit(CollectorEvent.ERROR, error)

    def _finish(self) -> None:
        with self._lock:
            if self._root_failed:
                self._state = CollectorState.FAILED
            elif self._cancelled.is_set():
                self._state = CollectorState.CANCELLED
            else:
                self._state = CollectorState.COMPLETE
            state = self._state
            error_count = len(self._errors)

        self._log.info(
            "traversal_finished",
            state=state.value,
            files=len(self.store),
            errors=error_count,
        )
        if state is CollectorState.COMPLETE:
            self._emit(CollectorEvent.COMPLETE, self.store)

        if self._executor is not None:
            # Called from a worker thread, so never wait on the pool here
            self._executor.shutdown(wait=False)
        self._finished.set()

    def _emit(self, event: CollectorEvent, *args: Any) -> None:
        with self._lock:
            handlers = list(self._handlers[event])
        for handler in handlers:
            try:
                handler(*args)
            except Exception:
                self._log.exception("handler_failed", event=event.value)
