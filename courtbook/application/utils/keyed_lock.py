from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLocks:
    """
    One lock per key, created on first use.

    A key's lock is dropped once nobody holds or waits on it, so the map
    only grows with the number of keys in use at the same time.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, threading.Lock] = {}
        self._holders: dict[Hashable, int] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def __len__(self) -> int:
        with self._lock_lock:
            return len(self._locks)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._lock_lock:
            lock = self._locks.setdefault(key, threading.Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._lock_lock:
                self._holders[key] -= 1
                if not self._holders[key]:
                    del self._holders[key]
                    del self._locks[key]
