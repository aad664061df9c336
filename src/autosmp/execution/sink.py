"""Trace sinks for simulated runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping


class TraceSink:
    """Abstract append-only sink for per-tick trace records."""

    def append(self, record: Mapping[str, object]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


@dataclass
class JsonlTraceSink(TraceSink):
    """Simple JSONLines sink writing one tick per line."""

    path: Path

    def __post_init__(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", encoding="utf-8")

    def append(self, record: Mapping[str, object]) -> None:
        json.dump(record, self._handle, ensure_ascii=False)
        self._handle.write("\n")
        self._handle.flush()

    def close(self) -> None:
        self._handle.close()


def read_trace(path: Path) -> List[dict]:
    records: List[dict] = []
    with Path(path).open(encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records


__all__ = ["JsonlTraceSink", "TraceSink", "read_trace"]
