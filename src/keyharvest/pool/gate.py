"""Counting admission gate for chunk tasks."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from ..errors import InvalidConfiguration


def check_permits(permits: int) -> int:
    if isinstance(permits, bool) or not isinstance(permits, int) or permits < 1:
        raise InvalidConfiguration(f"max concurrency must be a positive integer, got {permits!r}")
    return permits


class AdmissionGate:
    """N permits; ``acquire`` blocks while all of them are held.

    Tracks how many holders are active and the highest count observed so a
    run can report (and tests can assert) the concurrency actually reached.
    """

    def __init__(self, permits: int) -> None:
        self.permits = check_permits(permits)
        self._semaphore = threading.BoundedSemaphore(permits)
        self._lock = threading.Lock()
        self._active = 0
        self._peak = 0

    @property
    def active(self) -> int:
        with self._lock:
            return self._active

    @property
    def peak(self) -> int:
        with self._lock:
            return self._peak

    def acquire(self) -> None:
        self._semaphore.acquire()
        with self._lock:
            self._active += 1
            self._peak = max(self._peak, self._active)

    def release(self) -> None:
        with self._lock:
            self._active -= 1
        self._semaphore.release()

    @contextmanager
    def slot(self) -> Iterator[None]:
        self.acquire()
        try:
            yield
        finally:
            self.release()
