"""Per-store mutual exclusion.

Handlers hold the lock of the store they mutate from loading the aggregate
until the escrow side effects are done. Stores never share a lock, so
operations on different stores run in parallel.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class StoreLocks:
    """Registry of one lock per store id, created on first use."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, store_id: str) -> threading.Lock:
        """Return the lock of `store_id`, creating it if needed."""
        with self._guard:
            if (lock := self._locks.get(store_id)) is None:
                lock = self._locks[store_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, store_id: str) -> Iterator[None]:
        """Hold the lock of `store_id` for the duration of the block."""
        with self.lock_for(store_id):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
