"""Per-cluster scale up / scale down decisions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Sequence

from ..core.config import HotplugParams
from ..core.frequency import FrequencyQueryService
from ..core.lifecycle import CoreLifecycleController
from ..core.types import ActionKind, ClusterKind, ClusterSample, ClusterThresholds, HotplugAction
from .hysteresis import HysteresisCounter
from .sampler import sample_cluster

# Removing a performance core costs more than removing an efficiency core.
PERFORMANCE_DOWN_CYCLE_FACTOR = 3

Executor = Callable[[int, ClusterKind, ActionKind, str], HotplugAction]


@dataclass(slots=True, frozen=True)
class ClusterLimits:
    min_online: int
    max_online: int
    cycle_up: int
    cycle_down: int


def limits_for(cluster: ClusterKind, params: HotplugParams) -> ClusterLimits:
    if cluster is ClusterKind.EFFICIENCY:
        return ClusterLimits(
            min_online=params.min_cpus,
            max_online=params.max_cpus,
            cycle_up=params.cycle_up,
            cycle_down=params.cycle_down,
        )
    return ClusterLimits(
        min_online=params.min_cpus_hmp,
        max_online=params.max_cpus_hmp,
        cycle_up=params.cycle_up,
        cycle_down=params.cycle_down * PERFORMANCE_DOWN_CYCLE_FACTOR,
    )


@dataclass(slots=True)
class TickContext:
    """Everything one tick needs; rebuilt from scratch every tick."""

    params: HotplugParams
    counter: HysteresisCounter
    lifecycle: CoreLifecycleController
    frequency: FrequencyQueryService
    members: Mapping[ClusterKind, Sequence[int]]
    thresholds: Mapping[ClusterKind, Optional[ClusterThresholds]]
    execute: Executor
    anchor: Optional[int] = None
    actions: List[HotplugAction] = field(default_factory=list)

    def online_members(self, cluster: ClusterKind) -> List[int]:
        online = self.lifecycle.online_cores()
        return [core for core in self.members.get(cluster, ()) if core in online]

    def offline_members(self, cluster: ClusterKind) -> List[int]:
        online = self.lifecycle.online_cores()
        return [core for core in self.members.get(cluster, ()) if core not in online]

    def sample(self, cluster: ClusterKind) -> ClusterSample:
        return sample_cluster(
            cluster,
            self.members.get(cluster, ()),
            self.lifecycle.online_cores(),
            self.frequency,
            anchor=self.anchor,
        )

    def apply(self, core_id: int, cluster: ClusterKind, kind: ActionKind, reason: str) -> HotplugAction:
        action = self.execute(core_id, cluster, kind, reason)
        self.actions.append(action)
        return action


@dataclass(slots=True, frozen=True)
class Decision:
    kind: ActionKind
    core_id: int
    reason: str


def decide(
    sample: ClusterSample,
    thresholds: Optional[ClusterThresholds],
    limits: ClusterLimits,
    cycle: int,
    offline_cores: Sequence[int],
) -> Optional[Decision]:
    """Return at most one action for the cluster, or ``None``.

    Scale up wins whenever the slowest online core is above ``up_rate``;
    scale down is only considered otherwise. Both comparisons are strict.
    """

    if thresholds is None:
        return None

    if sample.slow_rate is not None and sample.slow_rate > thresholds.up_rate:
        if sample.online_count < limits.max_online and cycle >= limits.cycle_up and offline_cores:
            return Decision(ActionKind.ONLINE, min(offline_cores), "scale_up")
        return None

    if (
        sample.slow_core is not None
        and sample.fast_rate is not None
        and sample.fast_rate < thresholds.down_rate
        and sample.online_count > limits.min_online
        and cycle >= limits.cycle_down
    ):
        return Decision(ActionKind.OFFLINE, sample.slow_core, "scale_down")

    return None


def run_decision(ctx: TickContext, cluster: ClusterKind) -> Optional[HotplugAction]:
    """Sample ``cluster``, decide, and execute the result against ``ctx``."""

    sample = ctx.sample(cluster)
    decision = decide(
        sample,
        ctx.thresholds.get(cluster),
        limits_for(cluster, ctx.params),
        ctx.counter.value,
        ctx.offline_members(cluster),
    )
    if decision is None:
        return None

    action = ctx.apply(decision.core_id, cluster, decision.kind, decision.reason)
    ctx.counter.reset()
    return action


__all__ = [
    "ClusterLimits",
    "Decision",
    "PERFORMANCE_DOWN_CYCLE_FACTOR",
    "TickContext",
    "decide",
    "limits_for",
    "run_decision",
]
