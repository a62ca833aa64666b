"""
In-process keyed locks.

Serializes mutating billing operations per student inside one worker process.
Cross-process serialization is provided by the student row lock taken in the
same unit of work.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class KeyedLock:
    """Hands out one reentrant lock per key, dropping it when unused."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}
        self._waiters: Dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.RLock())
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def active_keys(self) -> int:
        with self._guard:
            return len(self._locks)


# Shared by every billing service in this process
student_locks = KeyedLock()
