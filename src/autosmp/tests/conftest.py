from __future__ import annotations

from typing import Iterator

import pytest

from autosmp.core.config import ConfigStore, HotplugParams
from autosmp.engine.controller import HotplugController
from autosmp.observability.stats import HotplugStats
from autosmp.platforms.simulated import SimulatedPlatform


@pytest.fixture
def platform() -> SimulatedPlatform:
    return SimulatedPlatform(efficiency=4, performance=4)


@pytest.fixture
def config() -> ConfigStore:
    return ConfigStore(HotplugParams())


@pytest.fixture
def make_controller():
    created: list[HotplugController] = []

    def factory(platform, config: ConfigStore | None = None, **kwargs) -> HotplugController:
        controller = HotplugController.from_platform(platform, config=config or ConfigStore(), **kwargs)
        created.append(controller)
        return controller

    yield factory

    for controller in created:
        controller.stop()


@pytest.fixture
def stats() -> Iterator[HotplugStats]:
    yield HotplugStats()
