"""Run the controller against the simulated platform."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Dict

import click
from rich.table import Table

from autosmp.core.errors import AutosmpError
from autosmp.core.registry import LoadProfileRegistry
from autosmp.engine import HotplugController
from autosmp.execution import JsonlTraceSink, SimulationRunner
from autosmp.observability import HotplugStats
from autosmp.platforms import SimulatedPlatform
from autosmp.platforms.profiles import resolve_profile

from ._console import console, info, success
from ._options import build_config, collect_params, setup_logging


@click.command(help="Simulate hotplug decisions under a synthetic load profile.")
@click.option("--profile", "profile_id", default="ramp", show_default=True,
              help="Load profile (see `autosmp simulate --list-profiles`)")
@click.option("--ticks", type=int, default=200, show_default=True)
@click.option("--efficiency", type=int, default=4, show_default=True, help="Efficiency core count")
@click.option("--performance", type=int, default=4, show_default=True, help="Performance core count")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--param", "overrides", multiple=True, callback=collect_params, help="Parameter key=value")
@click.option("--trace", type=click.Path(dir_okay=False, path_type=Path), help="Write JSONL trace here")
@click.option("--plot", "plot_path", type=click.Path(dir_okay=False, path_type=Path), help="Write a timeline PNG")
@click.option("--list-profiles", is_flag=True, help="List load profiles and exit")
@click.option("-v", "--verbose", is_flag=True, help="Log every action")
def simulate(
    profile_id: str,
    ticks: int,
    efficiency: int,
    performance: int,
    config_path: Path | None,
    overrides: Dict[str, str],
    trace: Path | None,
    plot_path: Path | None,
    list_profiles: bool,
    verbose: bool,
) -> None:
    if list_profiles:
        for key in LoadProfileRegistry.available():
            info(key)
        return

    if verbose:
        setup_logging()

    try:
        profile = resolve_profile(profile_id)
    except AutosmpError as exc:
        raise click.ClickException(str(exc)) from exc

    config = build_config(config_path, overrides)
    platform = SimulatedPlatform(efficiency, performance)
    stats = HotplugStats()
    controller = HotplugController.from_platform(platform, config=config, observer=stats)
    sink = JsonlTraceSink(trace) if trace is not None else None

    try:
        records = SimulationRunner(platform, controller, profile, sink=sink).run(ticks)
    finally:
        if sink is not None:
            sink.close()
        controller.stop()

    reasons: Counter[str] = Counter()
    for record in records:
        for action in record["actions"]:  # type: ignore[union-attr]
            reasons[action["reason"]] += 1

    table = Table(title=f"Simulation: {profile_id}, {ticks} ticks")
    table.add_column("Reason")
    table.add_column("Actions", justify="right")
    for reason, count in sorted(reasons.items()):
        table.add_row(reason, str(count))
    console.print(table)
    if records:
        final = records[-1]["online"]
        info(f"Final online cores: {final}")

    if trace is not None:
        success(f"Trace written to {trace}")
    if plot_path is not None and records:
        from autosmp.visualization import render_timeline

        render_timeline(records, plot_path)
        success(f"Timeline written to {plot_path}")


__all__ = ["simulate"]
