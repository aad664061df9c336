from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class FrequencyQueryService(ABC):
    """Read-only access to per-core clock rates (kHz)."""

    @abstractmethod
    def current_frequency(self, core_id: int) -> Optional[int]:
        """Return the current rate, or ``None`` when it cannot be read."""

    @abstractmethod
    def max_frequency(self, core_id: int) -> Optional[int]:
        """Return the policy maximum, or ``None`` when it cannot be read."""


__all__ = ["FrequencyQueryService"]
