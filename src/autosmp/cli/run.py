"""Run the hotplug controller against a live platform."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Dict

import click

from autosmp.core.errors import AutosmpError
from autosmp.core.platform import resolve_platform
from autosmp.display import BacklightDisplayNotifier, find_backlight
from autosmp.engine import HotplugController
from autosmp.observability import HotplugStats

from ._console import info, success, warning
from ._options import build_config, collect_params, setup_logging


@click.command(help="Run the hotplug controller until interrupted.")
@click.option("--platform", "platform_id", default="sysfs", show_default=True, help="Platform backend")
@click.option("--platform-param", multiple=True, callback=collect_params, help="Platform params key=value")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--param", "overrides", multiple=True, callback=collect_params, help="Parameter key=value")
@click.option("--disabled", is_flag=True, help="Start with the periodic tick disabled")
@click.option("--display/--no-display", "watch_display", default=True, show_default=True,
              help="Suspend while the backlight reports the display off")
@click.option("--backlight", type=click.Path(path_type=Path), help="bl_power file to watch")
@click.option("--poll-interval", type=float, default=0.5, show_default=True, help="Backlight poll seconds")
@click.option("--duration", type=float, help="Stop after this many seconds")
@click.option("--stats", "show_stats", is_flag=True, help="Print per-core offline counts on exit")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path))
def run(
    platform_id: str,
    platform_param: Dict[str, str],
    config_path: Path | None,
    overrides: Dict[str, str],
    disabled: bool,
    watch_display: bool,
    backlight: Path | None,
    poll_interval: float,
    duration: float | None,
    show_stats: bool,
    verbose: bool,
    log_file: Path | None,
) -> None:
    setup_logging(verbose, log_file)
    config = build_config(config_path, overrides, enabled=not disabled)

    try:
        platform = resolve_platform(platform_id, platform_param)
    except AutosmpError as exc:
        raise click.ClickException(str(exc)) from exc

    stats = HotplugStats()
    controller = HotplugController.from_platform(platform, config=config, observer=stats)

    notifier = None
    if watch_display:
        path = backlight or find_backlight()
        if path is None:
            warning("No backlight found; display suspend/resume disabled")
        else:
            notifier = BacklightDisplayNotifier(path, controller.on_display_event, poll_interval=poll_interval)

    success(f"Running on {platform.platform_name} ({len(platform.possible_cores())} cores)")
    controller.start()
    if notifier is not None:
        notifier.start()

    started = time.monotonic()
    try:
        while duration is None or time.monotonic() - started < duration:
            time.sleep(0.2)
    except KeyboardInterrupt:
        info("\nStopping controller")
    finally:
        if notifier is not None:
            notifier.stop()
        controller.stop()

    if show_stats:
        info("CPU  times_hotplugged")
        for line in stats.format_lines(platform.possible_cores()):
            info(line)


__all__ = ["run"]
