from __future__ import annotations

import threading


class HysteresisCounter:
    """Ticks elapsed since the last hotplug action, shared by both clusters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def advance(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


__all__ = ["HysteresisCounter"]
