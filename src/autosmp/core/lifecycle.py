from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Set

logger = logging.getLogger(__name__)


class CoreLifecycleController(ABC):
    """Base class for backends that bring cores online and offline.

    Subclasses implement the raw transitions; this class owns the anchor
    guard so no backend can take the anchor core down.
    """

    #: Core that must never be offlined. ``None`` disables the guard.
    anchor: Optional[int] = None

    @abstractmethod
    def is_online(self, core_id: int) -> bool:
        """Return True when the core is currently online."""

    @abstractmethod
    def possible_cores(self) -> Set[int]:
        """Return every core identifier that could be brought online."""

    @abstractmethod
    def _set_online(self, core_id: int, online: bool) -> bool:
        """Perform the transition; return False on failure."""

    def online_cores(self) -> Set[int]:
        return {core for core in self.possible_cores() if self.is_online(core)}

    def online(self, core_id: int) -> bool:
        if self.is_online(core_id):
            return True
        return self._set_online(core_id, True)

    def offline(self, core_id: int) -> bool:
        if self.anchor is not None and core_id == self.anchor:
            logger.warning("Refusing to offline anchor core %s", core_id)
            return False
        if not self.is_online(core_id):
            return True
        return self._set_online(core_id, False)


__all__ = ["CoreLifecycleController"]
