import pytest
from click.testing import CliRunner

from snapdiff import Snapdiff
from snapdiff.cli import cli, find_config_path, main, parse_reporter

from conftest import fake_runner_factory


@pytest.fixture
def snapdiff(config, interrupts):
    factory = fake_runner_factory()
    instance = Snapdiff(config, runner_factory=factory, interrupts=interrupts, environ={})
    instance.runners = factory.runners
    return instance


def test_find_config_path() -> None:
    assert find_config_path(["-c", "custom.yml", "test"]) == "custom.yml"
    assert find_config_path(["--config=other.yml"]) == "other.yml"
    assert find_config_path(["test"]) == ".snapdiff.yml"


def test_parse_reporter() -> None:
    assert parse_reporter("flat") == "flat"
    assert parse_reporter("json=out/report.json") == {"name": "json", "path": "out/report.json"}


def test_list_browsers(snapdiff) -> None:
    result = CliRunner().invoke(cli, ["list-browsers"], obj=snapdiff)

    assert result.exit_code == 0
    assert result.output.split() == ["chrome", "firefox"]


def test_test_command_runs_with_options(snapdiff, tests_dir) -> None:
    result = CliRunner().invoke(
        cli, ["test", str(tests_dir), "-b", "chrome", "-g", "logo", "-r", "flat"], obj=snapdiff,
    )

    assert result.exit_code == 0, result.output
    collection = snapdiff.runners[0].suite_collection
    assert [s.full_name for s in collection.all_suites()] == ["header", "header.logo"]


def test_update_command_passes_flags(snapdiff, tests_dir) -> None:
    result = CliRunner().invoke(cli, ["update", "--new"], obj=snapdiff)

    assert result.exit_code == 0, result.output
    assert snapdiff.runners[0].state_processor.new


def test_main_reports_config_errors(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["-c", str(tmp_path / "missing.yml"), "list-browsers"])

    assert exc_info.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_main_with_config_file(tmp_path, capsys) -> None:
    config_file = tmp_path / ".snapdiff.yml"
    config_file.write_text("browsers:\n  chrome: {}\n  opera: {}\n", encoding="utf-8")

    main(["--config", str(config_file), "list-browsers"])

    assert capsys.readouterr().out.split() == ["chrome", "opera"]
