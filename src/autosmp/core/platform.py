"""Combined platform contract and resolution helpers."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .errors import ResolutionError
from .frequency import FrequencyQueryService
from .lifecycle import CoreLifecycleController
from .registry import PlatformRegistry
from .topology import TopologyService
from .types import CoreInfo


class Platform(CoreLifecycleController, FrequencyQueryService, TopologyService):
    """A backend that provides all three collaborator services at once."""

    platform_id: str
    platform_name: str

    @property
    def anchor(self) -> Optional[int]:  # type: ignore[override]
        return self.anchor_core()

    def describe(self) -> List[CoreInfo]:
        """Snapshot every core for status displays."""

        anchor = self.anchor_core()
        snapshot: List[CoreInfo] = []
        for core in sorted(self.possible_cores()):
            online = self.is_online(core)
            snapshot.append(
                CoreInfo(
                    core_id=core,
                    cluster=self.cluster_of(core),
                    online=online,
                    frequency=self.current_frequency(core) if online else None,
                    max_frequency=self.max_frequency(core),
                    anchor=core == anchor,
                )
            )
        return snapshot


def resolve_platform(platform_id: str, params: Mapping[str, Any]) -> Platform:
    try:
        platform_cls = PlatformRegistry.get(platform_id)
    except KeyError as exc:
        known = ", ".join(PlatformRegistry.available())
        raise ResolutionError(f"Unknown platform '{platform_id}' (available: {known})") from exc

    try:
        return platform_cls(**params)
    except TypeError as exc:
        raise ResolutionError(
            f"Failed to instantiate platform '{platform_id}' with params {params!r}: {exc}"
        ) from exc


__all__ = ["Platform", "resolve_platform"]
