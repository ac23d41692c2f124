"""Console reporter printing one line per state."""

import click

from ..events import Events

ICONS = {
    "passed": click.style("✓", fg="green"),
    "failed": click.style("✗", fg="red"),
    "updated": click.style("✓", fg="cyan"),
    "skipped": click.style("-", fg="yellow"),
    "errored": click.style("!", fg="red"),
}


def _line(status: str, state, browser_id: str, details: str = "") -> None:
    line = f"{ICONS[status]} {state.full_name} [{browser_id}]"
    if details:
        line += f" {details}"
    click.echo(line)


def reporter(runner, path=None) -> None:
    def on_test_result(result):
        _line("passed" if result.equal else "failed", result.state, result.browser_id,
              "" if result.equal else f"(reference: {result.reference_path}, current: {result.current_path})")

    def on_update_result(result):
        _line("updated" if result.updated else "passed", result.state, result.browser_id,
              result.reference_path if result.updated else "")

    def on_end(stats):
        click.echo(
            f"\nTotal: {stats.total} Passed: {stats.passed} Failed: {stats.failed} "
            f"Updated: {stats.updated} Skipped: {stats.skipped} Errored: {stats.errored}"
        )

    runner.on(Events.TEST_RESULT, on_test_result)
    runner.on(Events.UPDATE_RESULT, on_update_result)
    runner.on(Events.SKIP_STATE, lambda data: _line("skipped", data["state"], data["browser_id"]))
    runner.on(Events.ERROR, lambda data: _line("errored", data["state"], data["browser_id"], str(data["error"])))
    runner.on(Events.END, on_end)
