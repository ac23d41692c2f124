"""Raw configuration validator.

Validates the loaded YAML mapping before it is turned into dataclasses.
"""

from typing import Any

from .schema import BROWSER_OPTIONS, ValidationError

_STRING_OPTIONS = ("root_url", "grid_url", "screenshots_dir", "screenshot_path")
_SYSTEM_STRING_OPTIONS = ("temp_dir", "project_root", "source_root", "capture_backend")


def validate_config(data: dict[str, Any]) -> list[ValidationError]:
    """Validate a raw configuration mapping.

    Checks:
    - Top-level and per-browser option types
    - ``system`` section option types
    - Presence of at least one browser

    Returns:
        List of problems, empty when the configuration is valid.
    """
    errors: list[ValidationError] = []

    _validate_browser_options(data, "", errors)
    _validate_system(data.get("system", {}), errors)
    _validate_browsers(data.get("browsers"), errors)

    return errors


def _validate_browser_options(section: dict, prefix: str, errors: list[ValidationError]) -> None:
    for name in _STRING_OPTIONS:
        value = section.get(name)
        if value is not None and not isinstance(value, str):
            errors.append(ValidationError(
                path=f"{prefix}{name}",
                message=f"must be a string, got {type(value).__name__}",
            ))

    capabilities = section.get("desired_capabilities")
    if capabilities is not None and not isinstance(capabilities, dict):
        errors.append(ValidationError(
            path=f"{prefix}desired_capabilities",
            message="must be a mapping",
        ))


def _validate_system(system: Any, errors: list[ValidationError]) -> None:
    if not isinstance(system, dict):
        errors.append(ValidationError(path="system", message="must be a mapping"))
        return

    debug = system.get("debug")
    if debug is not None and not isinstance(debug, bool):
        errors.append(ValidationError(path="system.debug", message="must be a boolean"))

    for name in _SYSTEM_STRING_OPTIONS:
        value = system.get(name)
        if value is not None and not isinstance(value, str):
            errors.append(ValidationError(
                path=f"system.{name}",
                message=f"must be a string, got {type(value).__name__}",
            ))

    plugins = system.get("plugins")
    if plugins is not None and not isinstance(plugins, dict):
        errors.append(ValidationError(
            path="system.plugins",
            message="must be a mapping of plugin name to options",
        ))


def _validate_browsers(browsers: Any, errors: list[ValidationError]) -> None:
    if not browsers:
        errors.append(ValidationError(
            path="browsers",
            message="at least one browser must be configured",
        ))
        return

    if not isinstance(browsers, dict):
        errors.append(ValidationError(path="browsers", message="must be a mapping"))
        return

    for browser_id, section in browsers.items():
        if section is None:
            continue
        if not isinstance(section, dict):
            errors.append(ValidationError(
                path=f"browsers.{browser_id}",
                message="must be a mapping",
            ))
            continue

        unknown = sorted(set(section) - set(BROWSER_OPTIONS))
        if unknown:
            errors.append(ValidationError(
                path=f"browsers.{browser_id}",
                message=f"unknown options: {', '.join(unknown)}",
            ))
        _validate_browser_options(section, f"browsers.{browser_id}.", errors)
