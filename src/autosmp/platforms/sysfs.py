"""Linux backend driven through /sys/devices/system/cpu."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Set

from ..core.errors import PlatformError
from ..core.platform import Platform
from ..core.registry import PlatformRegistry
from ..core.types import ClusterKind

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path("/sys/devices/system/cpu")


def parse_cpu_list(raw: str) -> Set[int]:
    """Parse the kernel cpulist format, e.g. ``"0-3,6,8-9"``."""

    cores: Set[int] = set()
    for piece in raw.strip().split(","):
        piece = piece.strip()
        if not piece:
            continue
        start, sep, end = piece.partition("-")
        if sep:
            cores.update(range(int(start), int(end) + 1))
        else:
            cores.add(int(start))
    return cores


@PlatformRegistry.register("sysfs")
class SysfsPlatform(Platform):
    """Reads topology/frequencies and toggles ``cpuN/online`` files.

    The lowest cluster id is treated as the efficiency cluster, every other
    id as performance. Read and write failures are logged and reported as
    "no signal" or a failed transition.
    """

    platform_id = "sysfs"
    platform_name = "Linux sysfs"

    def __init__(self, root: str | Path = DEFAULT_ROOT) -> None:
        self._root = Path(root)
        if not self._root.is_dir():
            raise PlatformError(f"CPU sysfs root not found: {self._root}")
        try:
            self._possible = parse_cpu_list((self._root / "possible").read_text())
        except (OSError, ValueError) as exc:
            raise PlatformError(f"Unable to read possible CPUs under {self._root}: {exc}") from exc
        if not self._possible:
            raise PlatformError(f"No CPUs listed under {self._root}")
        self._clusters = self._read_clusters()

    def _cpu_dir(self, core_id: int) -> Path:
        return self._root / f"cpu{core_id}"

    def _read_int(self, path: Path) -> Optional[int]:
        try:
            return int(path.read_text().strip())
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.debug("Failed to read %s: %s", path, exc)
            return None

    def _read_clusters(self) -> Dict[int, ClusterKind]:
        raw_ids: Dict[int, int] = {}
        for core in self._possible:
            topology = self._cpu_dir(core) / "topology"
            cluster_id = self._read_int(topology / "cluster_id")
            if cluster_id is None or cluster_id < 0:
                cluster_id = self._read_int(topology / "physical_package_id")
            raw_ids[core] = cluster_id if cluster_id is not None and cluster_id >= 0 else 0

        efficiency_id = min(raw_ids.values())
        return {
            core: ClusterKind.EFFICIENCY if raw == efficiency_id else ClusterKind.PERFORMANCE
            for core, raw in raw_ids.items()
        }

    # -- topology ------------------------------------------------------

    def cluster_of(self, core_id: int) -> ClusterKind:
        try:
            return self._clusters[core_id]
        except KeyError as exc:
            raise KeyError(f"Unknown core {core_id}") from exc

    def possible_cores(self) -> Set[int]:
        return set(self._possible)

    # -- lifecycle -----------------------------------------------------

    def is_online(self, core_id: int) -> bool:
        path = self._cpu_dir(core_id) / "online"
        if not path.exists():
            # Cores without a hotplug control (usually cpu0) are always online.
            return core_id in self._possible
        value = self._read_int(path)
        return bool(value)

    def _set_online(self, core_id: int, online: bool) -> bool:
        path = self._cpu_dir(core_id) / "online"
        try:
            path.write_text("1" if online else "0")
        except OSError as exc:
            logger.warning(
                "Failed to set cpu%s %s: %s", core_id, "online" if online else "offline", exc
            )
            return False
        return True

    # -- frequency -----------------------------------------------------

    def current_frequency(self, core_id: int) -> Optional[int]:
        return self._read_int(self._cpu_dir(core_id) / "cpufreq" / "scaling_cur_freq")

    def max_frequency(self, core_id: int) -> Optional[int]:
        cpufreq = self._cpu_dir(core_id) / "cpufreq"
        value = self._read_int(cpufreq / "scaling_max_freq")
        if value is None:
            value = self._read_int(cpufreq / "cpuinfo_max_freq")
        return value


__all__ = ["DEFAULT_ROOT", "SysfsPlatform", "parse_cpu_list"]
