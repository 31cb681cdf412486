"""Outstanding-work counter for traversals whose size is discovered lazily."""

from __future__ import annotations

import threading

from docmeta.core.errors import InternalError


class WorkCounter:
    """Counting join over a tree whose shape is revealed during the walk.

    The count starts at ``initial`` (one unit: the root). Expanding a
    directory adds its children before the directory itself is marked done,
    so the count cannot reach zero while siblings wait to be dispatched.

    Exactly one call to done() observes the transition to zero. After that
    the counter is settled and refuses further updates.
    """

    def __init__(self, initial: int = 1) -> None:
        if initial < 1:
            raise InternalError.unexpected("work counter needs at least one unit", initial=initial)
        self._count = initial
        self._settled = False
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._count

    @property
    def settled(self) -> bool:
        with self._lock:
            return self._settled

    def add(self, units: int) -> None:
        """Register newly discovered units of work."""
        if units < 0:
            raise InternalError.unexpected("cannot add negative work", units=units)
        with self._lock:
            if self._settled:
                raise InternalError.unexpected("work added after traversal settled", units=units)
            self._count += units

    def done(self) -> bool:
        """Retire one unit. Returns True only for the call that reaches zero."""
        with self._lock:
            if self._settled:
                raise InternalError.unexpected("work retired after traversal settled")
            self._count -= 1
            if self._count == 0:
                self._settled = True
                return True
            return False
