from __future__ import annotations

import threading

from autosmp.engine.hysteresis import HysteresisCounter


def test_advance_and_reset() -> None:
    counter = HysteresisCounter()
    assert counter.value == 0
    assert counter.advance() == 1
    assert counter.advance() == 2
    counter.reset()
    assert counter.value == 0


def test_concurrent_advances_are_not_lost() -> None:
    counter = HysteresisCounter()

    def worker() -> None:
        for _ in range(1000):
            counter.advance()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert counter.value == 4000
