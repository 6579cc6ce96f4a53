from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class StaffLockRegistry:
    """One mutex per staff id; different staff never contend."""

    def __init__(self):
        self._locks: dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, staff_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(staff_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[staff_id] = lock
            return lock

    @contextmanager
    def hold(self, staff_id: int) -> Iterator[None]:
        lock = self._lock_for(staff_id)
        with lock:
            yield
