"""Visualization helpers for simulated runs."""

from .timeline import render_timeline

__all__ = ["render_timeline"]
