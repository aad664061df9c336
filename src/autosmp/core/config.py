"""Live-tunable hotplug parameters."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


@dataclass(slots=True, frozen=True)
class HotplugParams:
    """
    Tunables read by every tick.

    ``delay`` and ``start_delay`` are milliseconds. Frequency thresholds are
    percentages of the cluster maximum; the ``_hmp`` variants apply to the
    performance cluster. ``cycle_up``/``cycle_down`` are hysteresis windows
    counted in ticks.
    """

    delay: int = 20
    start_delay: int = 20000
    min_cpus: int = 1
    max_cpus: int = 4
    min_cpus_hmp: int = 0
    max_cpus_hmp: int = 4
    cpufreq_up: int = 60
    cpufreq_down: int = 30
    cpufreq_up_hmp: int = 90
    cpufreq_down_hmp: int = 60
    cycle_up: int = 1
    cycle_down: int = 1


PARAM_NAMES = tuple(f.name for f in fields(HotplugParams))


def _coerce_unsigned(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid value for '{name}': {value!r}")
    if isinstance(value, int):
        result = value
    else:
        text = str(value).strip()
        if not text.isdigit():
            raise ConfigError(f"Invalid value for '{name}': {value!r}")
        result = int(text)
    if result < 0:
        raise ConfigError(f"Invalid value for '{name}': {value!r}")
    return result


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "y", "yes", "true", "on"}:
        return True
    if text in {"0", "n", "no", "false", "off"}:
        return False
    raise ConfigError(f"Invalid value for 'enabled': {value!r}")


class ConfigStore:
    """Thread-safe holder for :class:`HotplugParams` and the enabled flag.

    Writers may update values at any time; readers take a snapshot per tick.
    Values are parsed but never range-checked.
    """

    def __init__(self, params: HotplugParams | None = None, *, enabled: bool = True) -> None:
        self._lock = threading.Lock()
        self._params = params or HotplugParams()
        self._enabled = bool(enabled)
        self._listeners: List[Listener] = []

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def snapshot(self) -> HotplugParams:
        with self._lock:
            return self._params

    def get(self, name: str) -> Any:
        if name == "enabled":
            return self.enabled
        if name not in PARAM_NAMES:
            raise ConfigError(f"Unknown parameter '{name}'")
        return getattr(self.snapshot(), name)

    def set(self, name: str, value: Any) -> None:
        if name == "enabled":
            coerced: Any = _coerce_bool(value)
            with self._lock:
                self._enabled = coerced
        elif name in PARAM_NAMES:
            coerced = _coerce_unsigned(name, value)
            with self._lock:
                self._params = replace(self._params, **{name: coerced})
        else:
            raise ConfigError(f"Unknown parameter '{name}'")

        logger.debug("Parameter %s set to %s", name, coerced)
        for listener in list(self._listeners):
            listener(name, coerced)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def as_dict(self) -> Dict[str, Any]:
        with self._lock:
            payload: Dict[str, Any] = asdict(self._params)
            payload["enabled"] = self._enabled
        return payload


def load_config(path: Path) -> Dict[str, Any]:
    """Read parameter overrides from a JSON object file."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


__all__ = ["ConfigStore", "HotplugParams", "PARAM_NAMES", "load_config"]
