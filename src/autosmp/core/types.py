from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ClusterKind(str, Enum):
    """Cluster tier a core belongs to."""

    EFFICIENCY = "efficiency"
    PERFORMANCE = "performance"


class ControllerState(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class DisplayEvent(str, Enum):
    """Display power notifications delivered to the controller."""

    DISPLAY_ON = "display_on"
    DISPLAY_OFF = "display_off"


class ActionKind(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(slots=True)
class CoreInfo:
    """Point-in-time view of a single core."""

    core_id: int
    cluster: ClusterKind
    online: bool
    frequency: Optional[int] = None
    max_frequency: Optional[int] = None
    anchor: bool = False


@dataclass(slots=True, frozen=True)
class ClusterSample:
    """
    Frequency readings for the online members of one cluster.

    ``slow_rate`` and ``fast_rate`` include the anchor core, ``slow_core``
    never names it. Rates are ``None`` when no member could be read.
    """

    cluster: ClusterKind
    online_count: int
    slow_rate: Optional[int] = None
    slow_core: Optional[int] = None
    fast_rate: Optional[int] = None


@dataclass(slots=True, frozen=True)
class ClusterThresholds:
    cluster: ClusterKind
    max_rate: int
    up_rate: int
    down_rate: int


@dataclass(slots=True, frozen=True)
class HotplugAction:
    """A lifecycle request issued by the controller."""

    core_id: int
    cluster: ClusterKind
    kind: ActionKind
    reason: str
    succeeded: bool = True

    def describe(self) -> str:
        state = "on" if self.kind is ActionKind.ONLINE else "off"
        suffix = "" if self.succeeded else " (failed)"
        return f"CPU[{self.core_id}] {state}{suffix}"


__all__ = [
    "ActionKind",
    "ClusterKind",
    "ClusterSample",
    "ClusterThresholds",
    "ControllerState",
    "CoreInfo",
    "DisplayEvent",
    "HotplugAction",
]
