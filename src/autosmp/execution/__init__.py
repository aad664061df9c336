"""Scheduling and simulation components."""

from .scheduler import BulkOnlineWorker, TickScheduler
from .sink import JsonlTraceSink, read_trace
from .simulation import SimulationRunner

__all__ = [
    "BulkOnlineWorker",
    "JsonlTraceSink",
    "SimulationRunner",
    "TickScheduler",
    "read_trace",
]
