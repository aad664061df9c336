from __future__ import annotations

import pytest

from autosmp.core.errors import ResolutionError
from autosmp.core.platform import resolve_platform
from autosmp.core.registry import LoadProfileRegistry, PlatformRegistry, RegistryBase
from autosmp.platforms.simulated import SimulatedPlatform


class DummyEntry:
    def __init__(self, value: str) -> None:
        self.value = value


class DummyRegistry(RegistryBase[type[DummyEntry] | DummyEntry]):
    pass


def test_register_and_get() -> None:
    DummyRegistry.clear()

    @DummyRegistry.register("foo")
    class Foo(DummyEntry):
        pass

    assert DummyRegistry.get("foo") is Foo
    assert DummyRegistry.available() == ("foo",)


def test_register_duplicate_raises() -> None:
    DummyRegistry.clear()
    DummyRegistry.register("dup")(DummyEntry)

    with pytest.raises(ValueError):
        DummyRegistry.register("dup")(DummyEntry)


def test_missing_key_lists_known_entries() -> None:
    DummyRegistry.clear()
    DummyRegistry.register("known")(DummyEntry)

    with pytest.raises(KeyError, match="known"):
        DummyRegistry.get("unknown")


def test_create_non_callable_entry_raises() -> None:
    DummyRegistry.clear()
    DummyRegistry.register_value("value", DummyEntry("constant"))

    with pytest.raises(TypeError):
        DummyRegistry.create("value")


def test_bundled_entries_are_registered() -> None:
    assert {"simulated", "sysfs"} <= set(PlatformRegistry.available())
    assert {"idle", "saturate", "ramp", "burst"} <= set(LoadProfileRegistry.available())


def test_resolve_platform_passes_params() -> None:
    platform = resolve_platform("simulated", {"efficiency": "2", "performance": "1"})
    assert isinstance(platform, SimulatedPlatform)
    assert sorted(platform.possible_cores()) == [0, 1, 2]


def test_resolve_platform_unknown_id() -> None:
    with pytest.raises(ResolutionError, match="Unknown platform"):
        resolve_platform("quantum", {})


def test_resolve_platform_bad_params() -> None:
    with pytest.raises(ResolutionError, match="Failed to instantiate"):
        resolve_platform("simulated", {"cores": "8"})
