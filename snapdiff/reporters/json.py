"""JSON report generator.

Collects state results during a run and writes a structured JSON report
when the run ends.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..events import Events

DEFAULT_REPORT_PATH = "snapdiff-report.json"


class JsonReporter:
    """Generates JSON reports from runner events."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or DEFAULT_REPORT_PATH)
        self.results: list[dict[str, Any]] = []

    def attach(self, runner) -> None:
        runner.on(Events.TEST_RESULT, self.on_test_result)
        runner.on(Events.UPDATE_RESULT, self.on_update_result)
        runner.on(Events.SKIP_STATE, lambda data: self._add(data["state"], data["browser_id"], "skipped"))
        runner.on(Events.ERROR, lambda data: self._add(
            data["state"], data["browser_id"], "errored", reason=str(data["error"]),
        ))
        runner.on(Events.END, self.on_end)

    def on_test_result(self, result) -> None:
        self._add(
            result.state, result.browser_id, "passed" if result.equal else "failed",
            reference_path=result.reference_path,
            current_path=result.current_path,
        )

    def on_update_result(self, result) -> None:
        self._add(
            result.state, result.browser_id, "updated" if result.updated else "passed",
            reference_path=result.reference_path,
        )

    def on_end(self, stats) -> None:
        self.save(self.generate(stats))

    def _add(self, state, browser_id: str, status: str, **extra: Any) -> None:
        self.results.append({
            "suite": state.suite.full_name,
            "state": state.name,
            "browser_id": browser_id,
            "status": status,
            **extra,
        })

    def generate(self, stats) -> dict[str, Any]:
        """Generate the report from collected results.

        Args:
            stats: Run statistics emitted with END.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": "failed" if stats.has_failures else "passed",
            "summary": stats.as_dict(),
            "results": self.results,
        }

    def save(self, report: dict[str, Any]) -> Path:
        """Save report to ``self.path``.

        Returns:
            Path to the saved file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return self.path


def reporter(runner, path=None) -> JsonReporter:
    json_reporter = JsonReporter(path)
    json_reporter.attach(runner)
    return json_reporter
