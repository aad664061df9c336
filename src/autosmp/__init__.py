"""
Core package for autosmp, a load-driven CPU hotplug controller.

This module exposes the primary extension points so downstream packages can
import from a single namespace.
"""

from .core.config import ConfigStore, HotplugParams
from .core.frequency import FrequencyQueryService
from .core.lifecycle import CoreLifecycleController
from .core.platform import Platform
from .core.registry import LoadProfileRegistry, PlatformRegistry
from .core.topology import StaticTopology, TopologyService
from .core.types import (
    ActionKind,
    ClusterKind,
    ClusterSample,
    ClusterThresholds,
    ControllerState,
    CoreInfo,
    DisplayEvent,
    HotplugAction,
)
from .engine import HotplugController
from .observability import HotplugStats
from .platforms import SimulatedPlatform, SysfsPlatform

__all__ = [
    "ActionKind",
    "ClusterKind",
    "ClusterSample",
    "ClusterThresholds",
    "ConfigStore",
    "ControllerState",
    "CoreInfo",
    "CoreLifecycleController",
    "DisplayEvent",
    "FrequencyQueryService",
    "HotplugAction",
    "HotplugController",
    "HotplugParams",
    "HotplugStats",
    "LoadProfileRegistry",
    "Platform",
    "PlatformRegistry",
    "SimulatedPlatform",
    "StaticTopology",
    "SysfsPlatform",
    "TopologyService",
]
