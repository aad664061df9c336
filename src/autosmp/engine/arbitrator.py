"""Cross-cluster (HMP) policy."""

from __future__ import annotations

import logging
from typing import List

from ..core.types import ActionKind, ClusterKind, HotplugAction
from .decision import TickContext, limits_for, run_decision

logger = logging.getLogger(__name__)

# Efficiency cores kept online (anchor included) after trading for a performance core.
HMP_EFFICIENCY_TARGET = 2


def arbitrate(ctx: TickContext) -> List[HotplugAction]:
    """Run the HMP step that follows the efficiency decision each tick.

    With no performance core online, a saturated efficiency cluster is traded
    for one performance core plus ``HMP_EFFICIENCY_TARGET`` efficiency cores.
    Otherwise the performance cluster gets its own decision.
    """

    performance_online = ctx.online_members(ClusterKind.PERFORMANCE)
    if performance_online:
        action = run_decision(ctx, ClusterKind.PERFORMANCE)
        return [action] if action is not None else []
    return _trade_efficiency_for_performance(ctx)


def _trade_efficiency_for_performance(ctx: TickContext) -> List[HotplugAction]:
    efficiency = limits_for(ClusterKind.EFFICIENCY, ctx.params)
    performance = limits_for(ClusterKind.PERFORMANCE, ctx.params)

    efficiency_online = ctx.online_members(ClusterKind.EFFICIENCY)
    if len(efficiency_online) < efficiency.max_online:
        return []

    candidates = ctx.offline_members(ClusterKind.PERFORMANCE)
    if not candidates or performance.max_online < 1:
        return []

    actions: List[HotplugAction] = []
    bring_up = ctx.apply(min(candidates), ClusterKind.PERFORMANCE, ActionKind.ONLINE, "hmp_trade")
    actions.append(bring_up)
    ctx.counter.reset()
    if not bring_up.succeeded:
        logger.warning("HMP trade aborted: %s", bring_up.describe())
        return actions

    target = max(HMP_EFFICIENCY_TARGET, efficiency.min_online)
    remaining = len(efficiency_online)
    while remaining > target:
        victims = [core for core in ctx.online_members(ClusterKind.EFFICIENCY) if core != ctx.anchor]
        if not victims:
            break
        action = ctx.apply(min(victims), ClusterKind.EFFICIENCY, ActionKind.OFFLINE, "hmp_trade")
        actions.append(action)
        if not action.succeeded:
            break
        remaining -= 1

    return actions


__all__ = ["HMP_EFFICIENCY_TARGET", "arbitrate"]
