"""Plugin loading.

Plugins are declared in ``system.plugins``:

    system:
      plugins:
        teamcity: true
        html-report:
          path: report.html
        disabled-one: false

``teamcity`` is imported as ``snapdiff_teamcity`` and its
``register(api, options)`` function is called.
"""

import importlib
import logging
from typing import Any, Mapping

from .config import Config
from .emitter import EventEmitter, Handler, Unsubscribe
from .errors import PluginError
from .events import Events

log = logging.getLogger(__name__)

PLUGIN_PREFIX = "snapdiff_"


class PluginApi:
    """What a plugin gets to see: event subscription and the configuration."""

    events = Events

    def __init__(self, emitter: EventEmitter, config: Config):
        self._emitter = emitter
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    def on(self, event: str, handler: Handler) -> Unsubscribe:
        return self._emitter.on(event, handler)

    def once(self, event: str, handler: Handler) -> Unsubscribe:
        return self._emitter.once(event, handler)

    def off(self, event: str, handler: Handler) -> None:
        self._emitter.off(event, handler)


def plugin_module_name(name: str, prefix: str = PLUGIN_PREFIX) -> str:
    module_name = name.replace("-", "_")
    if module_name.startswith(prefix):
        return module_name
    return prefix + module_name


def load_plugins(
    emitter: EventEmitter,
    config: Config,
    plugins: Mapping[str, Any],
    prefix: str = PLUGIN_PREFIX,
) -> list[str]:
    """Import and register every enabled plugin.

    Returns:
        Module names of the loaded plugins, in declaration order.

    Raises:
        PluginError: If a plugin module is missing or has no ``register``.
    """
    api = PluginApi(emitter, config)
    loaded = []

    for name, options in plugins.items():
        if options is False:
            continue
        if options is True or options is None:
            options = {}

        module_name = plugin_module_name(name, prefix)
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name != module_name:
                raise
            raise PluginError(f"Cannot find plugin '{name}' (module {module_name})") from e

        register = getattr(module, "register", None)
        if not callable(register):
            raise PluginError(f"Plugin '{name}' has no register(api, options) function")

        log.debug("loading plugin %s", module_name)
        register(api, options)
        loaded.append(module_name)

    return loaded
