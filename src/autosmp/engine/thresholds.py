from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.config import HotplugParams
from ..core.frequency import FrequencyQueryService
from ..core.types import ClusterKind, ClusterThresholds

logger = logging.getLogger(__name__)


def cluster_percentages(cluster: ClusterKind, params: HotplugParams) -> tuple[int, int]:
    if cluster is ClusterKind.EFFICIENCY:
        return params.cpufreq_up, params.cpufreq_down
    return params.cpufreq_up_hmp, params.cpufreq_down_hmp


def compute_thresholds(
    cluster: ClusterKind,
    members: Sequence[int],
    frequency: FrequencyQueryService,
    params: HotplugParams,
) -> Optional[ClusterThresholds]:
    """Convert the configured percentages into absolute rates for ``cluster``.

    The maximum is read from the lowest-id member; all members share a policy.
    """

    if not members:
        return None
    max_rate = frequency.max_frequency(min(members))
    if max_rate is None:
        logger.debug("No max frequency for %s cluster; skipping", cluster.value)
        return None

    up_pct, down_pct = cluster_percentages(cluster, params)
    return ClusterThresholds(
        cluster=cluster,
        max_rate=max_rate,
        up_rate=up_pct * max_rate // 100,
        down_rate=down_pct * max_rate // 100,
    )


__all__ = ["cluster_percentages", "compute_thresholds"]
