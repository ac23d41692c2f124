"""State processors decide what the runner does with a captured screenshot.

The tester compares captures with reference screenshots, the screen
updater writes new references.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from . import temp
from .config import Config
from .errors import NoRefImageError
from .events import Events
from .suite import State


@dataclass
class TestResult:
    """Outcome of comparing a capture with its reference."""
    __test__ = False

    state: State
    browser_id: str
    reference_path: str
    current_path: str
    equal: bool


@dataclass
class UpdateResult:
    """Outcome of updating a reference screenshot."""
    state: State
    browser_id: str
    reference_path: str
    updated: bool


class StateProcessor:
    """Base class for state processors."""

    result_event: Events

    def __init__(self, config: Config):
        self.config = config

    @classmethod
    def create_tester(cls, config: Config) -> "Tester":
        return Tester(config)

    @classmethod
    def create_screen_updater(
        cls, config: Config, options: Optional[Mapping[str, Any]] = None
    ) -> "ScreenUpdater":
        options = options or {}
        return ScreenUpdater(config, diff=bool(options.get("diff")), new=bool(options.get("new")))

    def reference_path(self, state: State, browser_id: str) -> Path:
        browser = self.config.for_browser(browser_id)
        return Path(browser.get_screenshot_path(state.suite, state.name))

    async def exec(self, state: State, browser_id: str, image: bytes):
        raise NotImplementedError


class Tester(StateProcessor):
    """Compares captured screenshots with references."""
    __test__ = False

    result_event = Events.TEST_RESULT

    async def exec(self, state: State, browser_id: str, image: bytes) -> TestResult:
        reference_path = self.reference_path(state, browser_id)
        if not reference_path.exists():
            raise NoRefImageError(str(reference_path))

        current_path = temp.path()
        current_path.write_bytes(image)

        return TestResult(
            state=state,
            browser_id=browser_id,
            reference_path=str(reference_path),
            current_path=str(current_path),
            equal=reference_path.read_bytes() == image,
        )


class ScreenUpdater(StateProcessor):
    """Writes captured screenshots as references.

    With ``diff`` only changed references are rewritten, with ``new`` only
    missing ones are written. Without either flag every reference is written.
    """

    result_event = Events.UPDATE_RESULT

    def __init__(self, config: Config, diff: bool = False, new: bool = False):
        super().__init__(config)
        self.diff = diff
        self.new = new

    def should_update(self, reference_path: Path, image: bytes) -> bool:
        if not self.diff and not self.new:
            return True
        if not reference_path.exists():
            return self.new
        return self.diff and reference_path.read_bytes() != image

    async def exec(self, state: State, browser_id: str, image: bytes) -> UpdateResult:
        reference_path = self.reference_path(state, browser_id)
        updated = self.should_update(reference_path, image)

        if updated:
            reference_path.parent.mkdir(parents=True, exist_ok=True)
            reference_path.write_bytes(image)

        return UpdateResult(
            state=state,
            browser_id=browser_id,
            reference_path=str(reference_path),
            updated=updated,
        )
