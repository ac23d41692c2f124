"""Runner module - Test execution."""

from .backend import CaptureBackend, load_backend
from .runner import Runner
from .stats import Counters, Stats

__all__ = [
    "CaptureBackend",
    "Counters",
    "Runner",
    "Stats",
    "load_backend",
]
