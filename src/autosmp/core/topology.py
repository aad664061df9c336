from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional

from .types import ClusterKind


class TopologyService(ABC):
    """Maps core identifiers onto clusters."""

    @abstractmethod
    def cluster_of(self, core_id: int) -> ClusterKind:
        """Return the cluster the core belongs to."""

    @abstractmethod
    def possible_cores(self) -> Iterable[int]:
        """Return every core identifier the platform knows about."""

    def cores_in(self, cluster: ClusterKind) -> List[int]:
        return sorted(core for core in self.possible_cores() if self.cluster_of(core) is cluster)

    def anchor_core(self) -> Optional[int]:
        """The lowest efficiency core; it must stay online."""

        members = self.cores_in(ClusterKind.EFFICIENCY)
        return members[0] if members else None


class StaticTopology(TopologyService):
    def __init__(self, clusters: Mapping[int, ClusterKind]) -> None:
        self._clusters = dict(clusters)

    @classmethod
    def from_counts(cls, efficiency: int, performance: int) -> "StaticTopology":
        """Efficiency cores first, performance cores after them."""

        mapping = {core: ClusterKind.EFFICIENCY for core in range(efficiency)}
        mapping.update(
            {efficiency + offset: ClusterKind.PERFORMANCE for offset in range(performance)}
        )
        return cls(mapping)

    def cluster_of(self, core_id: int) -> ClusterKind:
        try:
            return self._clusters[core_id]
        except KeyError as exc:
            raise KeyError(f"Unknown core {core_id}") from exc

    def possible_cores(self) -> Iterable[int]:
        return sorted(self._clusters)


__all__ = ["StaticTopology", "TopologyService"]
