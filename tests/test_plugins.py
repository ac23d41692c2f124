import sys
import types

import pytest

from snapdiff import Events, Snapdiff
from snapdiff.errors import PluginError
from snapdiff.plugins import PluginApi, plugin_module_name


def install_plugin(monkeypatch, module_name, register):
    module = types.ModuleType(module_name)
    module.register = register
    monkeypatch.setitem(sys.modules, module_name, module)
    return module


def test_plugin_module_name() -> None:
    assert plugin_module_name("html-report") == "snapdiff_html_report"
    assert plugin_module_name("snapdiff-teamcity") == "snapdiff_teamcity"


@pytest.mark.asyncio
async def test_plugins_get_narrow_api_and_options(monkeypatch, raw_config, interrupts, tests_dir) -> None:
    calls = []

    def register(api, options):
        calls.append((api, options))

        async def on_init():
            calls.append("init")

        api.on(Events.INIT, on_init)

    install_plugin(monkeypatch, "snapdiff_recorder", register)
    install_plugin(monkeypatch, "snapdiff_disabled", lambda api, options: calls.append("disabled"))
    raw_config["system"]["plugins"] = {"recorder": {"level": 2}, "disabled": False}

    snapdiff = Snapdiff(raw_config, interrupts=interrupts, environ={})
    await snapdiff.read_tests()

    api, options = calls[0]
    assert isinstance(api, PluginApi)
    assert options == {"level": 2}
    assert api.config is snapdiff.config
    assert not hasattr(api, "halt")
    assert calls[1:] == ["init"]


def test_missing_plugin(raw_config, interrupts) -> None:
    raw_config["system"]["plugins"] = {"does-not-exist": True}

    with pytest.raises(PluginError, match="Cannot find plugin 'does-not-exist'"):
        Snapdiff(raw_config, interrupts=interrupts, environ={})


def test_plugin_without_register(monkeypatch, raw_config, interrupts) -> None:
    install_plugin(monkeypatch, "snapdiff_empty", None)
    raw_config["system"]["plugins"] = {"empty": True}

    with pytest.raises(PluginError, match="has no register"):
        Snapdiff(raw_config, interrupts=interrupts, environ={})
