from __future__ import annotations

import threading


class ClickCounter:
    """Process-wide click count shared by every request of one app instance.

    Handlers may run on the event loop or on the threadpool, so the
    read-modify-write in ``increment`` holds a lock.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("counter cannot start below zero")
        self._value = start
        self._lock = threading.Lock()

    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        """Add one click and return the count this click produced."""

        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    def __repr__(self) -> str:
        return f"ClickCounter(value={self.value()})"
