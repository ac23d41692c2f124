import asyncio
from typing import Optional

import pytest

from snapdiff.config import parse_config
from snapdiff.emitter import EventEmitter, PassthroughEmitter
from snapdiff.events import Events
from snapdiff.runner import Stats
from snapdiff.suite import Suite


class FakeRunner(PassthroughEmitter):
    """Runner double recording what it was asked to run."""

    instances: list["FakeRunner"] = []

    def __init__(self, config, state_processor, gate: Optional[asyncio.Event] = None):
        super().__init__()
        self.config = config
        self.state_processor = state_processor
        self.gate = gate
        self.cancelled = False
        self.suite_collection = None
        self.listeners_at_start: dict[str, int] = {}
        self.stats = Stats(total=1, passed=1)

    def cancel(self):
        self.cancelled = True

    async def run(self, suite_collection):
        self.suite_collection = suite_collection
        self.listeners_at_start = {e: self.listener_count(e) for e in Events}
        self.emit(Events.BEGIN, {})
        if self.gate is not None:
            await self.gate.wait()
        self.emit(Events.END, self.stats)
        return self.stats


def fake_runner_factory(gate: Optional[asyncio.Event] = None):
    runners: list[FakeRunner] = []

    def factory(config, state_processor):
        runner = FakeRunner(config, state_processor, gate)
        runners.append(runner)
        return runner

    factory.runners = runners
    return factory


def build_tree(*leaf_names: str) -> Suite:
    """Root suite with a leaf suite (one state) per dotted name."""
    root = Suite.create_root()
    for full_name in leaf_names:
        parent = root
        for name in full_name.split("."):
            child = next((c for c in parent.children if c.name == name), None)
            if child is None:
                child = parent.add_child(Suite(name=name))
            parent = child
        parent.add_state("plain")
    return root


def leaf_names(suite: Suite) -> set[str]:
    names = set()
    for child in suite.children:
        if child.has_states:
            names.add(child.full_name)
        names |= leaf_names(child)
    return names


@pytest.fixture
def raw_config(tmp_path):
    return {
        "root_url": "http://localhost:8080",
        "screenshots_dir": str(tmp_path / "screens"),
        "system": {
            "project_root": str(tmp_path),
            "temp_dir": str(tmp_path / "tmp"),
            "source_root": str(tmp_path / "tests"),
        },
        "browsers": {
            "chrome": {"desired_capabilities": {"browserName": "chrome"}},
            "firefox": {"desired_capabilities": {"browserName": "firefox"}},
        },
    }


@pytest.fixture
def config(raw_config):
    return parse_config(raw_config)


@pytest.fixture
def interrupts():
    return EventEmitter()


@pytest.fixture
def tests_dir(tmp_path):
    directory = tmp_path / "tests"
    directory.mkdir()
    (directory / "header.yaml").write_text(
        """
suites:
  - name: header
    url: /
    children:
      - name: logo
        capture_elements: .logo
        states:
          - name: plain
      - name: menu
        states:
          - name: plain
          - name: hovered
            actions:
              - type: hover
                target: .menu a
""",
        encoding="utf-8",
    )
    (directory / "footer.yml").write_text(
        """
suites:
  - name: footer
    browsers: [firefox]
    states:
      - name: plain
""",
        encoding="utf-8",
    )
    return directory
