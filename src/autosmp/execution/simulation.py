"""Drive a controller tick by tick against a simulated platform."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..core.types import ClusterKind
from .sink import TraceSink

if TYPE_CHECKING:
    from ..engine.controller import HotplugController
    from ..platforms.simulated import SimulatedPlatform


class SimulationRunner:
    """Apply a load profile, tick synchronously, and record each step."""

    def __init__(
        self,
        platform: SimulatedPlatform,
        controller: HotplugController,
        profile: Callable[[int], float],
        *,
        sink: Optional[TraceSink] = None,
    ) -> None:
        self._platform = platform
        self._controller = controller
        self._profile = profile
        self._sink = sink

    def run(self, ticks: int) -> List[Dict[str, object]]:
        records: List[Dict[str, object]] = []
        for index in range(ticks):
            load = self._profile(index)
            self._platform.apply_load(load)
            actions = self._controller.tick()
            record = {
                "tick": index,
                "load": round(float(load), 4),
                "cycle": self._controller.counter.value,
                "online": {
                    cluster.value: self._platform.online_count(cluster) for cluster in ClusterKind
                },
                "online_cores": sorted(self._platform.online_cores()),
                "actions": [_action_payload(asdict(action)) for action in actions],
            }
            records.append(record)
            if self._sink is not None:
                self._sink.append(record)
        return records


def _action_payload(payload: Dict[str, object]) -> Dict[str, object]:
    return {key: getattr(value, "value", value) for key, value in payload.items()}


__all__ = ["SimulationRunner"]
