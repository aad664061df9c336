"""Per-cluster frequency sampling."""

from __future__ import annotations

from typing import Iterable, Optional

from ..core.frequency import FrequencyQueryService
from ..core.types import ClusterKind, ClusterSample


def sample_cluster(
    cluster: ClusterKind,
    members: Iterable[int],
    online: Iterable[int],
    frequency: FrequencyQueryService,
    *,
    anchor: Optional[int] = None,
) -> ClusterSample:
    """Read the online members of ``cluster`` and summarise their rates.

    Members are visited in ascending id order. The anchor contributes to
    ``slow_rate`` and ``fast_rate`` but is never returned as ``slow_core``;
    among equal rates the first visited core is kept. Unreadable cores are
    skipped.
    """

    online_set = set(online)
    online_members = sorted(core for core in members if core in online_set)

    slow_rate: Optional[int] = None
    fast_rate: Optional[int] = None
    slow_core: Optional[int] = None
    slow_candidate_rate: Optional[int] = None

    for core in online_members:
        rate = frequency.current_frequency(core)
        if rate is None:
            continue
        if slow_rate is None or rate < slow_rate:
            slow_rate = rate
        if fast_rate is None or rate > fast_rate:
            fast_rate = rate
        if core == anchor:
            continue
        if slow_candidate_rate is None or rate < slow_candidate_rate:
            slow_candidate_rate = rate
            slow_core = core

    return ClusterSample(
        cluster=cluster,
        online_count=len(online_members),
        slow_rate=slow_rate,
        slow_core=slow_core,
        fast_rate=fast_rate,
    )


__all__ = ["sample_cluster"]
