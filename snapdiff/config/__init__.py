"""Config module - YAML configuration loading."""

from .schema import BrowserConfig, Config, SystemConfig, ValidationError
from .parser import parse_config, read_raw_config, split_cli_overrides
from .validator import validate_config

__all__ = [
    "BrowserConfig",
    "Config",
    "SystemConfig",
    "ValidationError",
    "parse_config",
    "read_raw_config",
    "split_cli_overrides",
    "validate_config",
]
