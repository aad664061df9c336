"""Command-line interface for autosmp (Click-based)."""

from __future__ import annotations

import click

# Import to trigger registry decorators
from autosmp import platforms  # noqa: F401

from .params import params
from .plot import plot
from .run import run
from .simulate import simulate
from .status import status


class OrderedGroup(click.Group):
    """Keep commands in registration order in --help."""

    def list_commands(self, ctx):  # type: ignore[override]
        return list(self.commands.keys())


@click.group(cls=OrderedGroup, help="autosmp CPU hotplug controller")
def cli() -> None:
    """Top-level CLI group."""


cli.add_command(run, "run")
cli.add_command(status, "status")
cli.add_command(simulate, "simulate")
cli.add_command(plot, "plot")
cli.add_command(params, "params")


def main() -> None:
    """CLI entry point for console scripts."""
    cli()


__all__ = ["cli", "main"]
