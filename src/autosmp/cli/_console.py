"""Rich console helpers shared by the CLI commands."""

from __future__ import annotations

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def info(message: str) -> None:
    console.print(message, highlight=False)


def success(message: str) -> None:
    console.print(f"[green]{message}[/green]", highlight=False)


def warning(message: str) -> None:
    err_console.print(f"[yellow]{message}[/yellow]", highlight=False)


def error(message: str) -> None:
    err_console.print(f"[bold red]{message}[/bold red]", highlight=False)


__all__ = ["console", "err_console", "error", "info", "success", "warning"]
