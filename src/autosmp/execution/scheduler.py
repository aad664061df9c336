"""Serialized periodic tick and background work helpers."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickScheduler:
    """Run ``callback`` on a dedicated thread, one invocation at a time.

    ``arm(delay)`` sets the next deadline. After each run the scheduler
    re-arms itself with ``interval()`` seconds unless ``cancel()`` was called
    while the run was in flight. ``cancel()`` returns only once no run is in
    flight, except when called from the callback itself.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        interval: Callable[[], float],
        *,
        name: str = "autosmp-tick",
    ) -> None:
        self._callback = callback
        self._interval = interval
        self._name = name
        self._cond = threading.Condition()
        self._deadline: Optional[float] = None
        self._epoch = 0
        self._running = False
        self._shutdown = False
        self._thread: Optional[threading.Thread] = None
        self._runs = 0

    @property
    def armed(self) -> bool:
        with self._cond:
            return self._deadline is not None

    @property
    def running(self) -> bool:
        with self._cond:
            return self._running

    @property
    def runs(self) -> int:
        with self._cond:
            return self._runs

    def start(self) -> None:
        with self._cond:
            if self._thread is not None:
                return
            self._shutdown = False
            self._thread = threading.Thread(target=self._run_loop, name=self._name, daemon=True)
            self._thread.start()

    def arm(self, delay: float) -> None:
        with self._cond:
            self._deadline = time.monotonic() + max(delay, 0.0)
            self._cond.notify_all()

    def cancel(self) -> None:
        with self._cond:
            self._deadline = None
            self._epoch += 1
            self._cond.notify_all()
            if threading.current_thread() is self._thread:
                return
            while self._running:
                self._cond.wait()

    def shutdown(self, timeout: float = 2.0) -> None:
        self.cancel()
        with self._cond:
            self._shutdown = True
            self._cond.notify_all()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run_loop(self) -> None:
        while True:
            with self._cond:
                while not self._shutdown:
                    if self._deadline is None:
                        self._cond.wait()
                        continue
                    remaining = self._deadline - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(timeout=remaining)
                if self._shutdown:
                    return
                self._deadline = None
                self._running = True
                epoch = self._epoch

            try:
                self._callback()
            except Exception:
                logger.exception("Tick callback failed")
            finally:
                with self._cond:
                    self._runs += 1
                    self._running = False
                    if not self._shutdown and self._epoch == epoch and self._deadline is None:
                        self._deadline = time.monotonic() + self._next_delay()
                    self._cond.notify_all()

    def _next_delay(self) -> float:
        try:
            return max(float(self._interval()), 0.0)
        except Exception:
            logger.exception("Tick interval provider failed; retrying in 1s")
            return 1.0


class BulkOnlineWorker:
    """Single background thread for fire-and-forget "all cores online" jobs."""

    def __init__(self, job: Callable[..., object], *, name: str = "autosmp-allup") -> None:
        self._job = job
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def dispatch(self, *args: object) -> Future:
        future = self._executor.submit(self._job, *args)
        future.add_done_callback(_log_failure)
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _log_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Bulk online job failed: %s", exc, exc_info=exc)


__all__ = ["BulkOnlineWorker", "TickScheduler"]
