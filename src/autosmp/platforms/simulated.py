"""In-memory two-cluster platform used by the simulator and the tests."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..core.platform import Platform
from ..core.registry import PlatformRegistry
from ..core.topology import StaticTopology
from ..core.types import ClusterKind

logger = logging.getLogger(__name__)

DEFAULT_EFFICIENCY_MAX_KHZ = 1_400_000
DEFAULT_PERFORMANCE_MAX_KHZ = 2_000_000


@PlatformRegistry.register("simulated")
class SimulatedPlatform(Platform):
    """Cores live in dicts; frequencies are set directly or from a load fraction.

    Efficiency cores take the lowest ids. Every core starts online unless
    ``online`` is given.
    """

    platform_id = "simulated"
    platform_name = "Simulated HMP SoC"

    def __init__(
        self,
        efficiency: int | str = 4,
        performance: int | str = 4,
        *,
        efficiency_max: int | str = DEFAULT_EFFICIENCY_MAX_KHZ,
        performance_max: int | str = DEFAULT_PERFORMANCE_MAX_KHZ,
        online: Optional[Iterable[int]] = None,
    ) -> None:
        self._topology = StaticTopology.from_counts(int(efficiency), int(performance))
        self._max = {
            ClusterKind.EFFICIENCY: int(efficiency_max),
            ClusterKind.PERFORMANCE: int(performance_max),
        }
        self._lock = threading.Lock()
        cores = list(self._topology.possible_cores())
        self._online: Set[int] = set(cores if online is None else online)
        self._frequency: Dict[int, int] = {core: 0 for core in cores}
        self._load = 0.0
        self._failing: Set[int] = set()
        self._unreadable: Set[int] = set()
        self.transitions: List[Tuple[str, int]] = []

    # -- topology ------------------------------------------------------

    def cluster_of(self, core_id: int) -> ClusterKind:
        return self._topology.cluster_of(core_id)

    def possible_cores(self) -> Set[int]:
        return set(self._topology.possible_cores())

    # -- lifecycle -----------------------------------------------------

    def is_online(self, core_id: int) -> bool:
        with self._lock:
            return core_id in self._online

    def _set_online(self, core_id: int, online: bool) -> bool:
        with self._lock:
            if core_id in self._failing:
                logger.debug("Simulated failure for core %s", core_id)
                return False
            self.transitions.append(("online" if online else "offline", core_id))
            if online:
                self._online.add(core_id)
                self._frequency[core_id] = self._rate_for(core_id, self._load)
            else:
                self._online.discard(core_id)
            return True

    # -- frequency -----------------------------------------------------

    def current_frequency(self, core_id: int) -> Optional[int]:
        with self._lock:
            if core_id in self._unreadable or core_id not in self._online:
                return None
            return self._frequency.get(core_id)

    def max_frequency(self, core_id: int) -> Optional[int]:
        if core_id in self._unreadable:
            return None
        return self._max[self.cluster_of(core_id)]

    # -- simulation controls -------------------------------------------

    def set_frequency(self, core_id: int, khz: int) -> None:
        with self._lock:
            self._frequency[core_id] = int(khz)

    def set_cluster_frequency(self, cluster: ClusterKind, khz: int) -> None:
        for core in self._topology.cores_in(cluster):
            self.set_frequency(core, khz)

    def apply_load(self, fraction: float) -> None:
        """Drive every online core to ``fraction`` of its cluster maximum."""

        fraction = min(max(float(fraction), 0.0), 1.0)
        with self._lock:
            self._load = fraction
            for core in self._online:
                self._frequency[core] = self._rate_for(core, fraction)

    def fail_transitions(self, core_id: int, failing: bool = True) -> None:
        with self._lock:
            if failing:
                self._failing.add(core_id)
            else:
                self._failing.discard(core_id)

    def fail_reads(self, core_id: int, failing: bool = True) -> None:
        with self._lock:
            if failing:
                self._unreadable.add(core_id)
            else:
                self._unreadable.discard(core_id)

    def online_count(self, cluster: ClusterKind) -> int:
        members = set(self._topology.cores_in(cluster))
        with self._lock:
            return len(members & self._online)

    def _rate_for(self, core_id: int, fraction: float) -> int:
        return int(self._max[self._topology.cluster_of(core_id)] * fraction)


__all__ = ["SimulatedPlatform"]
