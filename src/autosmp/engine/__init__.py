"""Sampling, thresholds, decisions and the controller loop."""

from .arbitrator import arbitrate
from .controller import HotplugController
from .decision import ClusterLimits, Decision, TickContext, decide, limits_for, run_decision
from .hysteresis import HysteresisCounter
from .sampler import sample_cluster
from .thresholds import compute_thresholds

__all__ = [
    "ClusterLimits",
    "Decision",
    "HotplugController",
    "HysteresisCounter",
    "TickContext",
    "arbitrate",
    "compute_thresholds",
    "decide",
    "limits_for",
    "run_decision",
    "sample_cluster",
]
