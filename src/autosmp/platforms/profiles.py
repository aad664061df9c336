"""Load profiles for simulated runs: tick index -> load fraction in [0, 1]."""

from __future__ import annotations

from ..core.errors import ResolutionError
from ..core.registry import LoadProfileRegistry


@LoadProfileRegistry.register("idle")
def idle(tick: int) -> float:
    return 0.05


@LoadProfileRegistry.register("saturate")
def saturate(tick: int) -> float:
    return 1.0


@LoadProfileRegistry.register("ramp")
def ramp(tick: int, period: int = 100) -> float:
    """Triangle wave: 0 -> 1 -> 0 over ``period`` ticks."""
    phase = tick % period
    half = period / 2
    return phase / half if phase < half else (period - phase) / half


@LoadProfileRegistry.register("burst")
def burst(tick: int, length: int = 25) -> float:
    return 1.0 if (tick // length) % 2 else 0.1


def resolve_profile(profile_id: str):
    try:
        return LoadProfileRegistry.get(profile_id)
    except KeyError as exc:
        known = ", ".join(LoadProfileRegistry.available())
        raise ResolutionError(f"Unknown load profile '{profile_id}' (available: {known})") from exc


__all__ = ["burst", "idle", "ramp", "resolve_profile", "saturate"]
