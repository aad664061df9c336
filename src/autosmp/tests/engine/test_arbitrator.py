from __future__ import annotations

from autosmp.core.config import ConfigStore, HotplugParams
from autosmp.core.types import ActionKind, ClusterKind
from autosmp.platforms.simulated import SimulatedPlatform


def test_saturated_efficiency_cluster_trades_for_one_performance_core(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2, 3})
    platform.apply_load(0.5)
    controller = make_controller(platform)

    actions = controller.tick()

    assert [(a.kind, a.core_id) for a in actions] == [
        (ActionKind.ONLINE, 4),
        (ActionKind.OFFLINE, 1),
        (ActionKind.OFFLINE, 2),
    ]
    assert all(action.reason == "hmp_trade" for action in actions)
    assert platform.online_cores() == {0, 3, 4}
    assert platform.online_count(ClusterKind.EFFICIENCY) == 2
    assert platform.online_count(ClusterKind.PERFORMANCE) == 1
    assert controller.counter.value == 0


def test_no_trade_below_efficiency_max(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2})
    platform.apply_load(0.5)
    controller = make_controller(platform)

    assert controller.tick() == []
    assert platform.online_count(ClusterKind.PERFORMANCE) == 0


def test_no_trade_without_performance_cluster(make_controller) -> None:
    platform = SimulatedPlatform(4, 0)
    platform.apply_load(0.5)
    controller = make_controller(platform)

    assert controller.tick() == []
    assert platform.online_cores() == {0, 1, 2, 3}


def test_no_trade_when_performance_max_is_zero(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2, 3})
    platform.apply_load(0.5)
    controller = make_controller(platform, ConfigStore(HotplugParams(max_cpus_hmp=0)))

    assert controller.tick() == []


def test_failed_performance_online_keeps_efficiency_cores(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2, 3})
    platform.apply_load(0.5)
    platform.fail_transitions(4)
    controller = make_controller(platform)

    actions = controller.tick()

    assert len(actions) == 1
    assert actions[0].succeeded is False
    assert platform.online_count(ClusterKind.EFFICIENCY) == 4


def test_trade_never_drops_below_efficiency_minimum(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2, 3})
    platform.apply_load(0.5)
    controller = make_controller(platform, ConfigStore(HotplugParams(min_cpus=3)))

    controller.tick()

    assert platform.online_count(ClusterKind.EFFICIENCY) == 3
    assert 0 in platform.online_cores()


def test_stalled_offline_stops_the_trade(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 1, 2, 3})
    platform.apply_load(0.5)
    platform.fail_transitions(1)
    controller = make_controller(platform)

    actions = controller.tick()

    assert [(a.core_id, a.succeeded) for a in actions] == [(4, True), (1, False)]
    assert platform.online_count(ClusterKind.EFFICIENCY) == 4


def test_performance_cluster_scales_up_once_active(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 3, 4})
    platform.apply_load(1.0)
    controller = make_controller(platform, ConfigStore(HotplugParams(cycle_up=1)))

    first = controller.tick()
    # Efficiency scales up and resets the counter, so the performance path waits.
    assert [(a.core_id, a.reason) for a in first] == [(1, "scale_up")]

    second = controller.tick()
    assert [(a.core_id, a.cluster) for a in second] == [(2, ClusterKind.EFFICIENCY)]

    # Efficiency is now full; the performance cluster gets the next action.
    third = controller.tick()
    assert [(a.kind, a.core_id, a.cluster) for a in third] == [
        (ActionKind.ONLINE, 5, ClusterKind.PERFORMANCE)
    ]


def test_performance_down_window_is_three_times_cycle_down(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0, 3, 4})
    platform.apply_load(0.0)
    controller = make_controller(platform, ConfigStore(HotplugParams(min_cpus=2, cycle_down=1)))

    assert controller.tick() == []
    assert controller.tick() == []
    actions = controller.tick()

    assert [(a.kind, a.core_id, a.cluster) for a in actions] == [
        (ActionKind.OFFLINE, 4, ClusterKind.PERFORMANCE)
    ]
    assert platform.online_count(ClusterKind.PERFORMANCE) == 0
