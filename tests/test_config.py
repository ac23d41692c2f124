from pathlib import Path

import pytest

from snapdiff.config import parse_config, read_raw_config, split_cli_overrides
from snapdiff.errors import ConfigError
from snapdiff.suite import Suite


def test_browsers_inherit_top_level_options(config, tmp_path) -> None:
    chrome = config.for_browser("chrome")

    assert config.get_browser_ids() == ["chrome", "firefox"]
    assert chrome.root_url == "http://localhost:8080"
    assert chrome.desired_capabilities == {"browserName": "chrome"}
    assert chrome.screenshots_dir == str(tmp_path / "screens")


def test_screenshot_path_template(config, tmp_path) -> None:
    suite = Suite.create_root().add_child(Suite(name="header")).add_child(Suite(name="logo"))

    path = config.for_browser("firefox").get_screenshot_path(suite, "plain")

    assert Path(path) == tmp_path / "screens" / "header" / "logo" / "plain" / "firefox.png"


def test_unknown_browser_is_config_error(config) -> None:
    with pytest.raises(ConfigError, match="Unknown browser id: ie"):
        config.for_browser("ie")


def test_validation_reports_every_problem() -> None:
    with pytest.raises(ConfigError) as exc_info:
        parse_config({"root_url": 1, "system": {"debug": "yes"}, "browsers": {}})

    message = str(exc_info.value)
    assert "root_url: must be a string" in message
    assert "system.debug: must be a boolean" in message
    assert "browsers: at least one browser must be configured" in message


def test_unknown_browser_option_is_rejected() -> None:
    with pytest.raises(ConfigError, match="unknown options: color"):
        parse_config({"browsers": {"chrome": {"color": "red"}}})


def test_read_raw_config_sets_project_root(tmp_path) -> None:
    config_file = tmp_path / ".snapdiff.yml"
    config_file.write_text(
        "screenshots_dir: shots\nbrowsers:\n  chrome:\n    desired_capabilities: {browserName: chrome}\n",
        encoding="utf-8",
    )

    raw = read_raw_config(config_file)
    config = parse_config(config_file)

    assert raw["system"]["project_root"] == str(tmp_path.resolve())
    assert config.for_browser("chrome").screenshots_dir == str(tmp_path.resolve() / "shots")


def test_read_raw_config_errors(tmp_path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        read_raw_config(tmp_path / "missing.yml")

    listed = tmp_path / "list.yml"
    listed.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a YAML mapping"):
        read_raw_config(listed)


def test_env_and_cli_overrides(raw_config) -> None:
    config = parse_config(
        raw_config,
        {"env": True, "cli": True},
        environ={"SNAPDIFF_ROOT_URL": "http://env", "SNAPDIFF_SYSTEM_DEBUG": "yes"},
        argv=["test", "--root-url", "http://cli"],
    )

    assert config.system.debug is True
    assert config.for_browser("chrome").root_url == "http://cli"


def test_overrides_are_off_by_default(raw_config) -> None:
    config = parse_config(raw_config, environ={"SNAPDIFF_ROOT_URL": "http://env"})

    assert config.for_browser("chrome").root_url == "http://localhost:8080"


def test_invalid_boolean_override(raw_config) -> None:
    with pytest.raises(ConfigError, match="Invalid boolean"):
        parse_config(raw_config, {"env": True}, environ={"SNAPDIFF_SYSTEM_DEBUG": "maybe"})


def test_split_cli_overrides() -> None:
    overrides, rest = split_cli_overrides(["--system-debug=true", "test", "--grep", "x", "--root-url", "u"])

    assert overrides == {("system", "debug"): "true", ("root_url",): "u"}
    assert rest == ["test", "--grep", "x"]
