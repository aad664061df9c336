from __future__ import annotations

from autosmp.core.config import ConfigStore
from autosmp.core.types import ActionKind, ClusterKind, HotplugAction
from autosmp.observability.stats import HotplugStats
from autosmp.platforms.simulated import SimulatedPlatform


def _action(core: int, kind: ActionKind, succeeded: bool = True) -> HotplugAction:
    return HotplugAction(core, ClusterKind.EFFICIENCY, kind, "scale_down", succeeded)


def test_counts_successful_transitions_only() -> None:
    stats = HotplugStats()
    stats.record(_action(1, ActionKind.OFFLINE))
    stats.record(_action(1, ActionKind.OFFLINE))
    stats.record(_action(2, ActionKind.OFFLINE, succeeded=False))
    stats.record(_action(2, ActionKind.ONLINE))

    assert stats.times_hotplugged() == {1: 2}
    assert stats.times_onlined() == {2: 1}


def test_format_lines_lists_every_core() -> None:
    stats = HotplugStats()
    stats.record(_action(3, ActionKind.OFFLINE))
    assert stats.format_lines([3, 0, 1]) == ["0 0", "1 0", "3 1"]

    stats.reset()
    assert stats.times_hotplugged() == {}


def test_controller_reports_actions_to_observer(make_controller) -> None:
    platform = SimulatedPlatform(4, 0)
    stats = HotplugStats()
    controller = make_controller(platform, ConfigStore(), observer=stats)

    platform.apply_load(0.0)
    controller.tick()

    assert sum(stats.times_hotplugged().values()) == 1
