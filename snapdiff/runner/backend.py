"""Capture backend loading.

The backend drives real browsers. It is referenced from the config as
``system.capture_backend: "package.module:factory"``; the factory is called
with the config and must return an object with an async
``capture(state, browser_config) -> bytes`` method.
"""

import importlib
from typing import Protocol

from ..config import BrowserConfig, Config
from ..errors import SnapdiffError
from ..suite import State


class CaptureBackend(Protocol):
    async def capture(self, state: State, browser: BrowserConfig) -> bytes:
        ...


def load_backend(config: Config) -> CaptureBackend:
    """Instantiate the backend configured in ``system.capture_backend``.

    Raises:
        SnapdiffError: If no backend is configured or it cannot be imported.
    """
    reference = config.system.capture_backend
    if not reference:
        raise SnapdiffError(
            "No capture backend configured. Set system.capture_backend to 'module:factory'."
        )

    module_name, _, attr = reference.partition(":")
    if not attr:
        raise SnapdiffError(f"Invalid capture backend reference '{reference}', expected 'module:factory'")

    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        raise SnapdiffError(f"Cannot import capture backend module '{module_name}': {e}") from e

    try:
        factory = getattr(module, attr)
    except AttributeError:
        raise SnapdiffError(f"Module '{module_name}' has no attribute '{attr}'") from None

    return factory(config)
