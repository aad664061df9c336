"""Display power notifications derived from a backlight ``bl_power`` file."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from ..core.types import DisplayEvent

logger = logging.getLogger(__name__)

BACKLIGHT_ROOT = Path("/sys/class/backlight")
FB_BLANK_UNBLANK = 0


def find_backlight(root: Path = BACKLIGHT_ROOT) -> Optional[Path]:
    """Return the first ``bl_power`` file under ``root``, if any."""

    if not root.is_dir():
        return None
    for entry in sorted(root.iterdir()):
        candidate = entry / "bl_power"
        if candidate.exists():
            return candidate
    return None


class BacklightDisplayNotifier:
    """Poll ``bl_power`` and report on/off transitions to ``callback``.

    The first successful read establishes the baseline without emitting an
    event. Unreadable values are ignored until the file becomes readable again.
    """

    def __init__(
        self,
        path: Path,
        callback: Callable[[DisplayEvent], object],
        *,
        poll_interval: float = 0.5,
    ) -> None:
        self._path = Path(path)
        self._callback = callback
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last: Optional[DisplayEvent] = None

    def read_state(self) -> Optional[DisplayEvent]:
        try:
            raw = int(self._path.read_text().strip())
        except (OSError, ValueError) as exc:
            logger.debug("Unable to read %s: %s", self._path, exc)
            return None
        return DisplayEvent.DISPLAY_ON if raw == FB_BLANK_UNBLANK else DisplayEvent.DISPLAY_OFF

    def poll_once(self) -> Optional[DisplayEvent]:
        """Read once; return the event delivered, if the state changed."""

        current = self.read_state()
        if current is None:
            return None
        previous, self._last = self._last, current
        if previous is None or previous is current:
            return None
        logger.info("Display power changed: %s", current.value)
        self._callback(current)
        return current

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="autosmp-display", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

    def __enter__(self) -> "BacklightDisplayNotifier":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Display event handler failed")
            self._stop_event.wait(self._poll_interval)


__all__ = ["BACKLIGHT_ROOT", "BacklightDisplayNotifier", "find_backlight"]
