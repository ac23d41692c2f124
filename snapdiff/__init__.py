"""Snapdiff - visual regression test orchestration."""

from .errors import (
    ConfigError,
    DiscoveryError,
    NoRefImageError,
    PluginError,
    SnapdiffError,
    UnknownReporterError,
)
from .events import Events
from .orchestrator import Snapdiff
from .suite import Action, State, Suite
from .suite_collection import SuiteCollection

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ConfigError",
    "DiscoveryError",
    "Events",
    "NoRefImageError",
    "PluginError",
    "Snapdiff",
    "SnapdiffError",
    "State",
    "Suite",
    "SuiteCollection",
    "UnknownReporterError",
]
