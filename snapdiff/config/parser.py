"""YAML configuration reader for snapdiff.

Reads the configuration file, applies environment and command line
overrides, validates the result and builds Config dataclasses.
"""

import copy
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import yaml

from ..errors import ConfigError
from .schema import BROWSER_OPTIONS, BrowserConfig, Config, SystemConfig
from .validator import validate_config

ENV_PREFIX = "SNAPDIFF_"

# Scalar options that can be overridden, as key paths into the raw mapping.
OVERRIDABLE_OPTIONS = (
    ("root_url",),
    ("grid_url",),
    ("screenshots_dir",),
    ("system", "debug"),
    ("system", "temp_dir"),
    ("system", "source_root"),
    ("system", "capture_backend"),
)
BOOLEAN_OPTIONS = {("system", "debug")}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def read_raw_config(file_path: Union[str, Path]) -> dict[str, Any]:
    """Load a YAML configuration file.

    ``system.project_root`` defaults to the directory of the file.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise ConfigError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {file_path}: {e}") from e

    if data is None:
        raise ConfigError(f"Empty config file: {file_path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(data).__name__}")

    system = data.setdefault("system", {})
    if isinstance(system, dict):
        system.setdefault("project_root", str(file_path.resolve().parent))

    return data


def parse_config(
    raw: Union[str, Path, Mapping[str, Any]],
    allow_overrides: Optional[Mapping[str, bool]] = None,
    environ: Optional[Mapping[str, str]] = None,
    argv: Optional[Sequence[str]] = None,
) -> Config:
    """Build a validated Config.

    Args:
        raw: Path to a YAML file or an already loaded mapping.
        allow_overrides: ``{"env": bool, "cli": bool}``. Nothing is overridden by default.
        environ: Environment to read overrides from. Defaults to ``os.environ``.
        argv: Arguments to read overrides from. Defaults to ``sys.argv[1:]``.

    Raises:
        ConfigError: With every validation problem found.
    """
    if isinstance(raw, (str, Path)):
        data = read_raw_config(raw)
    elif isinstance(raw, Mapping):
        data = copy.deepcopy(dict(raw))
    else:
        raise ConfigError(f"Config must be a file path or a mapping, got {type(raw).__name__}")

    allow_overrides = allow_overrides or {}
    if allow_overrides.get("env"):
        _apply_overrides(data, env_overrides(os.environ if environ is None else environ))
    if allow_overrides.get("cli"):
        _apply_overrides(data, cli_overrides(sys.argv[1:] if argv is None else argv))

    errors = validate_config(data)
    if errors:
        raise ConfigError("Invalid config: " + "; ".join(str(e) for e in errors))

    return _build(data)


def env_overrides(environ: Mapping[str, str]) -> dict[tuple[str, ...], str]:
    """Collect ``SNAPDIFF_<PATH>`` overrides, e.g. ``SNAPDIFF_SYSTEM_DEBUG``."""
    overrides = {}
    for option in OVERRIDABLE_OPTIONS:
        name = ENV_PREFIX + "_".join(option).upper()
        if name in environ:
            overrides[option] = environ[name]
    return overrides


def cli_overrides(argv: Sequence[str]) -> dict[tuple[str, ...], str]:
    """Collect ``--<path> value`` overrides, e.g. ``--system-debug true``."""
    return split_cli_overrides(argv)[0]


def split_cli_overrides(argv: Sequence[str]) -> tuple[dict[tuple[str, ...], str], list[str]]:
    """Separate override flags from the other arguments.

    Returns:
        Overrides by option path, and the remaining arguments.
    """
    flags = {"--" + "-".join(option).replace("_", "-"): option for option in OVERRIDABLE_OPTIONS}
    overrides = {}
    rest = []
    i = 0

    while i < len(argv):
        arg = argv[i]
        if "=" in arg and arg.split("=", 1)[0] in flags:
            flag, value = arg.split("=", 1)
            overrides[flags[flag]] = value
        elif arg in flags and i + 1 < len(argv):
            i += 1
            overrides[flags[arg]] = argv[i]
        else:
            rest.append(arg)
        i += 1

    return overrides, rest


def _apply_overrides(data: dict, overrides: dict[tuple[str, ...], str]) -> None:
    for option, value in overrides.items():
        section = data
        for key in option[:-1]:
            section = section.setdefault(key, {})
        section[option[-1]] = _coerce(option, value)


def _coerce(option: tuple[str, ...], value: str) -> Any:
    if option not in BOOLEAN_OPTIONS:
        return value
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean value for {'.'.join(option)}: {value!r}")


def _build(data: dict[str, Any]) -> Config:
    system_data = data.get("system") or {}
    system = SystemConfig(**{
        k: v for k, v in system_data.items()
        if k in SystemConfig.__dataclass_fields__
    })
    system.plugins = dict(system.plugins or {})
    system.temp_dir = _resolve(system.project_root, system.temp_dir)
    system.source_root = _resolve(system.project_root, system.source_root)

    defaults = {k: data[k] for k in BROWSER_OPTIONS if data.get(k) is not None}
    browsers = {}
    for browser_id, section in data["browsers"].items():
        options = {**defaults, **{k: v for k, v in (section or {}).items() if v is not None}}
        browser = BrowserConfig(id=str(browser_id), **options)
        browser.screenshots_dir = _resolve(system.project_root, browser.screenshots_dir)
        browsers[str(browser_id)] = browser

    return Config(system=system, browsers=browsers)


def _resolve(root: str, path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    return str(Path(root, path)) if not os.path.isabs(path) else path
