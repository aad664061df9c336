"""Exception hierarchy shared across autosmp."""

from __future__ import annotations


class AutosmpError(RuntimeError):
    """Base class for autosmp errors."""


class ConfigError(AutosmpError, ValueError):
    """Raised when a configuration value cannot be parsed."""


class PlatformError(AutosmpError):
    """Raised when a platform backend cannot be initialised."""


class ResolutionError(AutosmpError):
    """Raised when a configured component cannot be resolved."""


__all__ = ["AutosmpError", "ConfigError", "PlatformError", "ResolutionError"]
