"""
Core abstractions and shared infrastructure for autosmp.
"""

from .config import ConfigStore, HotplugParams, load_config
from .errors import AutosmpError, ConfigError, PlatformError, ResolutionError
from .frequency import FrequencyQueryService
from .lifecycle import CoreLifecycleController
from .platform import Platform, resolve_platform
from .registry import LoadProfileRegistry, PlatformRegistry
from .topology import StaticTopology, TopologyService
from .types import (
    ActionKind,
    ClusterKind,
    ClusterSample,
    ClusterThresholds,
    ControllerState,
    CoreInfo,
    DisplayEvent,
    HotplugAction,
)

__all__ = [
    "ActionKind",
    "AutosmpError",
    "ClusterKind",
    "ClusterSample",
    "ClusterThresholds",
    "ConfigError",
    "ConfigStore",
    "ControllerState",
    "CoreInfo",
    "CoreLifecycleController",
    "DisplayEvent",
    "FrequencyQueryService",
    "HotplugAction",
    "HotplugParams",
    "LoadProfileRegistry",
    "Platform",
    "PlatformError",
    "PlatformRegistry",
    "ResolutionError",
    "StaticTopology",
    "TopologyService",
    "load_config",
    "resolve_platform",
]
