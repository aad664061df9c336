from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Tuple, TypeVar

T = TypeVar("T")


class RegistryBase(Generic[T]):
    """Class-level key -> entry mapping; each subclass gets its own storage."""

    @classmethod
    def _entries(cls) -> Dict[str, T]:
        storage = cls.__dict__.get("_registry_entries")
        if storage is None:
            storage = {}
            setattr(cls, "_registry_entries", storage)
        return storage  # type: ignore[return-value]

    @classmethod
    def register(cls, key: str) -> Callable[[T], T]:
        def decorator(entry: T) -> T:
            return cls.register_value(key, entry)

        return decorator

    @classmethod
    def register_value(cls, key: str, value: T) -> T:
        entries = cls._entries()
        if key in entries:
            raise ValueError(f"{cls.__name__} already has an entry for '{key}'")
        entries[key] = value
        return value

    @classmethod
    def get(cls, key: str) -> T:
        try:
            return cls._entries()[key]
        except KeyError as exc:
            known = ", ".join(cls.available()) or "none"
            raise KeyError(f"{cls.__name__} has no entry '{key}' (known: {known})") from exc

    @classmethod
    def create(cls, key: str, *args: Any, **kwargs: Any) -> Any:
        entry = cls.get(key)
        if not callable(entry):
            raise TypeError(f"{cls.__name__} entry '{key}' is not callable")
        return entry(*args, **kwargs)

    @classmethod
    def available(cls) -> Tuple[str, ...]:
        return tuple(sorted(cls._entries()))

    @classmethod
    def items(cls) -> Tuple[Tuple[str, T], ...]:
        return tuple(sorted(cls._entries().items()))

    @classmethod
    def clear(cls) -> None:
        cls._entries().clear()


class PlatformRegistry(RegistryBase[Callable[..., Any]]):
    """Platform backends (topology + frequency + lifecycle in one object)."""


class LoadProfileRegistry(RegistryBase[Callable[[int], float]]):
    """Simulated load profiles: tick index -> load fraction."""


__all__ = ["LoadProfileRegistry", "PlatformRegistry", "RegistryBase"]
