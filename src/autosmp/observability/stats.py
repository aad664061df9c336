"""Optional per-core hotplug counters."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Dict, Iterable, List, Protocol

from ..core.types import ActionKind, HotplugAction


class HotplugObserver(Protocol):
    def record(self, action: HotplugAction) -> None: ...


class HotplugStats:
    """Count successful online/offline transitions per core."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._onlined: Counter[int] = Counter()
        self._offlined: Counter[int] = Counter()

    def record(self, action: HotplugAction) -> None:
        if not action.succeeded:
            return
        with self._lock:
            if action.kind is ActionKind.ONLINE:
                self._onlined[action.core_id] += 1
            else:
                self._offlined[action.core_id] += 1

    def times_onlined(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._onlined)

    def times_hotplugged(self) -> Dict[int, int]:
        """Offline transitions per core."""
        with self._lock:
            return dict(self._offlined)

    def format_lines(self, cores: Iterable[int]) -> List[str]:
        counts = self.times_hotplugged()
        return [f"{core} {counts.get(core, 0)}" for core in sorted(cores)]

    def reset(self) -> None:
        with self._lock:
            self._onlined.clear()
            self._offlined.clear()


__all__ = ["HotplugObserver", "HotplugStats"]
