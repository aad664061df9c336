"""Hotplug controller: periodic tick plus suspend/resume state machine."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, wait
from typing import Any, Dict, List, Optional

from ..core.config import ConfigStore
from ..core.frequency import FrequencyQueryService
from ..core.lifecycle import CoreLifecycleController
from ..core.topology import TopologyService
from ..core.types import ActionKind, ClusterKind, ControllerState, DisplayEvent, HotplugAction
from ..execution.scheduler import BulkOnlineWorker, TickScheduler
from ..observability.stats import HotplugObserver
from .arbitrator import arbitrate
from .decision import TickContext, run_decision
from .hysteresis import HysteresisCounter
from .thresholds import compute_thresholds

logger = logging.getLogger(__name__)


class HotplugController:
    """Owns parameters, the hysteresis counter, the tick and the display state.

    Every hotplug request, whether from a tick, a suspend, or a bulk online
    job, is issued under one lock so sources never race on the same core.
    """

    def __init__(
        self,
        lifecycle: CoreLifecycleController,
        frequency: FrequencyQueryService,
        topology: TopologyService,
        *,
        config: ConfigStore | None = None,
        observer: HotplugObserver | None = None,
    ) -> None:
        self._lifecycle = lifecycle
        self._frequency = frequency
        self._topology = topology
        self._config = config or ConfigStore()
        self._observer = observer
        self._counter = HysteresisCounter()
        self._state = ControllerState.ACTIVE
        self._suspends = 0
        self._state_lock = threading.Lock()
        self._hotplug_lock = threading.RLock()
        self._pending: List[Future] = []
        self._scheduler = TickScheduler(self._scheduled_tick, self._tick_interval)
        self._worker = BulkOnlineWorker(self._bring_all_online)
        self._config.add_listener(self._on_config_change)

    @classmethod
    def from_platform(cls, platform: Any, **kwargs: Any) -> "HotplugController":
        return cls(platform, platform, platform, **kwargs)

    @property
    def config(self) -> ConfigStore:
        return self._config

    @property
    def counter(self) -> HysteresisCounter:
        return self._counter

    @property
    def state(self) -> ControllerState:
        with self._state_lock:
            return self._state

    @property
    def ticking(self) -> bool:
        return self._scheduler.armed or self._scheduler.running

    # -- lifecycle -----------------------------------------------------

    def start(self) -> None:
        self._scheduler.start()
        if self._config.enabled and self.state is ControllerState.ACTIVE:
            self._scheduler.arm(self._config.snapshot().start_delay / 1000.0)
        logger.info("initialized")

    def stop(self) -> None:
        self._config.remove_listener(self._on_config_change)
        self._scheduler.shutdown()
        self._worker.shutdown(wait=True)

    def join_background(self, timeout: float | None = None) -> None:
        """Wait for dispatched bulk online jobs to finish."""

        with self._state_lock:
            pending, self._pending = self._pending, []
        wait(pending, timeout=timeout)

    # -- tick ----------------------------------------------------------

    def tick(self) -> List[HotplugAction]:
        """Run one sampling-and-decision pass and return the issued actions."""

        if self.state is ControllerState.SUSPENDED:
            return []

        params = self._config.snapshot()
        self._counter.advance()

        members = {cluster: self._topology.cores_in(cluster) for cluster in ClusterKind}
        ctx = TickContext(
            params=params,
            counter=self._counter,
            lifecycle=self._lifecycle,
            frequency=self._frequency,
            members=members,
            thresholds={
                cluster: compute_thresholds(cluster, members[cluster], self._frequency, params)
                for cluster in ClusterKind
            },
            execute=self._execute,
            anchor=self._topology.anchor_core(),
        )

        with self._hotplug_lock:
            run_decision(ctx, ClusterKind.EFFICIENCY)
            arbitrate(ctx)
        return ctx.actions

    def _scheduled_tick(self) -> None:
        self.tick()

    def _tick_interval(self) -> float:
        return self._config.snapshot().delay / 1000.0

    def _execute(
        self, core_id: int, cluster: ClusterKind, kind: ActionKind, reason: str
    ) -> HotplugAction:
        with self._hotplug_lock:
            if kind is ActionKind.ONLINE:
                ok = self._lifecycle.online(core_id)
            else:
                ok = self._lifecycle.offline(core_id)
        action = HotplugAction(core_id=core_id, cluster=cluster, kind=kind, reason=reason, succeeded=ok)
        if ok:
            logger.info("%s (%s)", action.describe(), reason)
        else:
            logger.warning("%s (%s)", action.describe(), reason)
        if self._observer is not None:
            self._observer.record(action)
        return action

    # -- display / enable ----------------------------------------------

    def on_display_event(self, event: DisplayEvent) -> Optional[Future]:
        if event is DisplayEvent.DISPLAY_OFF:
            self.suspend()
            return None
        if event is DisplayEvent.DISPLAY_ON:
            return self.resume()
        logger.debug("Ignoring display event %r", event)
        return None

    def suspend(self) -> List[HotplugAction]:
        """Stop ticking, then take every non-anchor core offline, highest id first."""

        with self._state_lock:
            if self._state is ControllerState.SUSPENDED:
                return []
            self._state = ControllerState.SUSPENDED
            self._suspends += 1

        self._scheduler.cancel()

        anchor = self._topology.anchor_core()
        actions: List[HotplugAction] = []
        with self._hotplug_lock:
            for core in sorted(self._lifecycle.online_cores(), reverse=True):
                if core == anchor:
                    continue
                actions.append(
                    self._execute(core, self._topology.cluster_of(core), ActionKind.OFFLINE, "suspend")
                )
        logger.info("suspended")
        return actions

    def resume(self) -> Optional[Future]:
        """Bring cores back in the background and restart the tick if enabled."""

        with self._state_lock:
            if self._state is ControllerState.ACTIVE:
                return None
            self._state = ControllerState.ACTIVE

        future = self.dispatch_all_online("resume")
        if self._config.enabled:
            self._scheduler.arm(self._tick_interval())
        logger.info("resumed")
        return future

    def set_enabled(self, enabled: bool) -> None:
        self._config.set("enabled", enabled)

    def dispatch_all_online(self, reason: str) -> Future:
        """Queue a background job that brings every possible core online.

        The job stops early if the controller is suspended after dispatch.
        """

        with self._state_lock:
            future = self._worker.dispatch(reason, self._suspends)
            self._pending = [pending for pending in self._pending if not pending.done()]
            self._pending.append(future)
        return future

    def _on_config_change(self, name: str, value: Any) -> None:
        if name != "enabled":
            return
        if value:
            if self.state is ControllerState.ACTIVE:
                self._scheduler.arm(self._tick_interval())
            logger.info("enabled")
        else:
            self._scheduler.cancel()
            self.dispatch_all_online("disable")
            logger.info("disabled")

    def _bring_all_online(self, reason: str, suspends: int) -> List[HotplugAction]:
        actions: List[HotplugAction] = []
        for core in sorted(self._lifecycle.possible_cores()):
            with self._hotplug_lock:
                with self._state_lock:
                    superseded = self._suspends != suspends
                if superseded:
                    logger.info("Bulk online (%s) stopped: suspended", reason)
                    break
                if self._lifecycle.is_online(core):
                    continue
                actions.append(
                    self._execute(core, self._topology.cluster_of(core), ActionKind.ONLINE, reason)
                )
        return actions

    def status(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "enabled": self._config.enabled,
            "cycle": self._counter.value,
            "online": sorted(self._lifecycle.online_cores()),
        }


__all__ = ["HotplugController"]
