"""Platform backends bundled with autosmp."""

from . import profiles  # noqa: F401
from .simulated import SimulatedPlatform
from .sysfs import SysfsPlatform, parse_cpu_list

__all__ = ["SimulatedPlatform", "SysfsPlatform", "parse_cpu_list"]
