"""Per-key mutual exclusion for serialising booking transitions."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """Registry of thread locks, one per key.

    Usage::
        with locks.hold(booking_id):
            # read status, check transition, append tracking event, save

    Locks are created on first use and dropped once no thread holds or waits
    for them, so the registry does not grow with the number of bookings.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        with self._registry_lock:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._registry_lock:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        """Number of keys currently held or waited for."""
        with self._registry_lock:
            return len(self._locks)
