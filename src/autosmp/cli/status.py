"""Show the cores a platform backend reports."""

from __future__ import annotations

from typing import Dict

import click
from rich.table import Table

from autosmp.core.errors import AutosmpError
from autosmp.core.platform import resolve_platform

from ._console import console
from ._options import collect_params


def _format_khz(value: int | None) -> str:
    if value is None:
        return "-"
    return f"{value / 1000:.0f} MHz"


@click.command(help="Show per-core cluster, online state and frequencies.")
@click.option("--platform", "platform_id", default="sysfs", show_default=True, help="Platform backend")
@click.option("--platform-param", multiple=True, callback=collect_params, help="Platform params key=value")
def status(platform_id: str, platform_param: Dict[str, str]) -> None:
    try:
        platform = resolve_platform(platform_id, platform_param)
        cores = platform.describe()
    except AutosmpError as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title=f"{platform.platform_name} cores")
    table.add_column("CPU", justify="right")
    table.add_column("Cluster")
    table.add_column("Online")
    table.add_column("Current", justify="right")
    table.add_column("Max", justify="right")
    for core in cores:
        label = f"{core.core_id}*" if core.anchor else str(core.core_id)
        table.add_row(
            label,
            core.cluster.value,
            "[green]yes[/green]" if core.online else "[dim]no[/dim]",
            _format_khz(core.frequency),
            _format_khz(core.max_frequency),
        )
    console.print(table)
    console.print("[dim]* anchor core (never taken offline)[/dim]")


__all__ = ["status"]
