"""Option parsing and setup shared by CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import click

from autosmp.core.config import ConfigStore, HotplugParams, load_config
from autosmp.core.errors import ConfigError


def collect_params(ctx, param, values):
    """Parse repeated ``key=value`` (or comma separated) options into a dict."""
    collected: Dict[str, str] = {}
    for item in values:
        for piece in item.split(","):
            if not piece:
                continue
            key, _, raw = piece.partition("=")
            key = key.strip()
            if not key:
                continue
            collected[key] = raw.strip()
    return collected


def build_config(
    config_path: Optional[Path],
    overrides: Mapping[str, Any],
    *,
    enabled: Optional[bool] = None,
) -> ConfigStore:
    store = ConfigStore(HotplugParams())
    try:
        if config_path is not None:
            store.update(load_config(config_path))
        store.update(overrides)
        if enabled is not None:
            store.set("enabled", enabled)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    return store


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure the ``autosmp`` logger for console and optional file output."""

    logger = logging.getLogger("autosmp")
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


__all__ = ["build_config", "collect_params", "setup_logging"]
