"""Plot a recorded simulation trace."""

from __future__ import annotations

from pathlib import Path

import click

from autosmp.execution import read_trace

from ._console import error, success


@click.command(help="Render a timeline PNG from a JSONL simulation trace.")
@click.argument("trace", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Output image (default: <trace>.png)")
def plot(trace: Path, output_path: Path | None) -> None:
    from autosmp.visualization import render_timeline

    records = read_trace(trace)
    if not records:
        error(f"No records in {trace}")
        raise click.Abort()

    output_path = output_path or trace.with_suffix(".png")
    render_timeline(records, output_path)
    success(f"Timeline written to {output_path}")


__all__ = ["plot"]
