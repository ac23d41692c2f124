import json

import pytest

from snapdiff.emitter import EventEmitter
from snapdiff.errors import UnknownReporterError
from snapdiff import reporters
from snapdiff.events import Events
from snapdiff.reporters import (
    CallableReporter,
    NamedReporter,
    PathReporter,
    apply_reporter,
    as_descriptor,
    resolve,
)
from snapdiff.runner import Stats
from snapdiff.state_processor import TestResult

from conftest import build_tree


def test_descriptor_variants() -> None:
    fn = lambda runner: None

    assert as_descriptor("flat") == NamedReporter("flat")
    assert as_descriptor({"name": "json", "path": "out.json"}) == PathReporter("json", "out.json")
    assert as_descriptor(fn) == CallableReporter(fn)


def test_bad_descriptor_is_type_error() -> None:
    with pytest.raises(TypeError, match="Reporter must be a name, a descriptor, or a callable"):
        as_descriptor(3)


def test_unknown_reporter_name() -> None:
    with pytest.raises(UnknownReporterError, match="No such reporter: missing"):
        resolve("missing")


def test_import_failure_inside_reporter_propagates(monkeypatch, tmp_path) -> None:
    (tmp_path / "broken.py").write_text("import snapdiff_missing_dependency\n", encoding="utf-8")
    monkeypatch.setattr(reporters, "__path__", [*reporters.__path__, str(tmp_path)])

    with pytest.raises(ModuleNotFoundError) as exc_info:
        resolve("broken")

    assert exc_info.value.name == "snapdiff_missing_dependency"


@pytest.mark.asyncio
async def test_json_reporter_writes_report(tmp_path) -> None:
    runner = EventEmitter()
    report_path = tmp_path / "report" / "out.json"
    state = build_tree("a.b").children[0].children[0].states[0]

    await apply_reporter(runner, {"name": "json", "path": str(report_path)})
    runner.emit(Events.TEST_RESULT, TestResult(state, "chrome", "ref.png", "cur.png", equal=False))
    runner.emit(Events.SKIP_STATE, {"state": state, "browser_id": "firefox"})
    runner.emit(Events.END, Stats(total=2, failed=1, skipped=1))

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["status"] == "failed"
    assert report["summary"]["failed"] == 1
    assert report["results"][0] == {
        "suite": "a.b",
        "state": "plain",
        "browser_id": "chrome",
        "status": "failed",
        "reference_path": "ref.png",
        "current_path": "cur.png",
    }
    assert report["results"][1]["status"] == "skipped"


@pytest.mark.asyncio
async def test_flat_reporter_prints_results(capsys) -> None:
    runner = EventEmitter()
    state = build_tree("a.b").children[0].children[0].states[0]

    await apply_reporter(runner, "flat")
    runner.emit(Events.TEST_RESULT, TestResult(state, "chrome", "ref.png", "cur.png", equal=True))
    runner.emit(Events.ERROR, {"state": state, "browser_id": "firefox", "error": RuntimeError("boom")})
    runner.emit(Events.END, Stats(total=2, passed=1, errored=1))

    out = capsys.readouterr().out
    assert "a.b.plain [chrome]" in out
    assert "a.b.plain [firefox] boom" in out
    assert "Total: 2 Passed: 1 Failed: 0" in out
