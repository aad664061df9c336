"""Show tunable parameters and their values."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import click
from rich.table import Table

from ._console import console
from ._options import build_config, collect_params

_DESCRIPTIONS = {
    "delay": "Tick interval (ms)",
    "start_delay": "Delay before the first tick (ms)",
    "min_cpus": "Minimum online efficiency cores",
    "max_cpus": "Maximum online efficiency cores",
    "min_cpus_hmp": "Minimum online performance cores",
    "max_cpus_hmp": "Maximum online performance cores",
    "cpufreq_up": "Efficiency scale-up threshold (% of max)",
    "cpufreq_down": "Efficiency scale-down threshold (% of max)",
    "cpufreq_up_hmp": "Performance scale-up threshold (% of max)",
    "cpufreq_down_hmp": "Performance scale-down threshold (% of max)",
    "cycle_up": "Ticks between actions before scaling up",
    "cycle_down": "Ticks between actions before scaling down (x3 for performance)",
    "enabled": "Periodic tick enabled",
}


@click.command(help="Show tunable parameters with any overrides applied.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--param", "overrides", multiple=True, callback=collect_params, help="Override key=value")
def params(config_path: Path | None, overrides: Dict[str, str]) -> None:
    store = build_config(config_path, overrides)

    table = Table(title="autosmp parameters")
    table.add_column("Name", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Description")
    for name, value in store.as_dict().items():
        table.add_row(name, str(value), _DESCRIPTIONS.get(name, ""))
    console.print(table)


__all__ = ["params"]
