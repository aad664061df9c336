from __future__ import annotations

import json
from pathlib import Path

from autosmp.core.config import ConfigStore
from autosmp.execution.simulation import SimulationRunner
from autosmp.execution.sink import JsonlTraceSink, read_trace
from autosmp.platforms.profiles import saturate
from autosmp.platforms.simulated import SimulatedPlatform


def test_runner_records_each_tick(make_controller) -> None:
    platform = SimulatedPlatform(4, 4, online={0})
    controller = make_controller(platform, ConfigStore())

    records = SimulationRunner(platform, controller, saturate).run(5)

    assert [record["tick"] for record in records] == list(range(5))
    assert records[0]["actions"][0] == {
        "core_id": 1,
        "cluster": "efficiency",
        "kind": "online",
        "reason": "scale_up",
        "succeeded": True,
    }
    assert records[0]["online"] == {"efficiency": 2, "performance": 0}
    assert records[0]["online_cores"] == [0, 1]


def test_runner_streams_records_to_sink(tmp_path: Path, make_controller) -> None:
    platform = SimulatedPlatform(2, 2)
    controller = make_controller(platform, ConfigStore())
    trace_path = tmp_path / "trace" / "run.jsonl"
    sink = JsonlTraceSink(trace_path)
    try:
        SimulationRunner(platform, controller, lambda tick: 0.0, sink=sink).run(3)
    finally:
        sink.close()

    lines = trace_path.read_text().splitlines()
    assert len(lines) == 3
    assert json.loads(lines[0])["load"] == 0.0
    assert read_trace(trace_path)[2]["tick"] == 2

