"""Runner - executes a suite collection against configured browsers.

Coordinates the run:
1. Emit BEGIN
2. For each browser, open a session
3. For each suite and state, capture and hand the image to the state processor
4. Emit END with the statistics, also when cancelled or failed
"""

import logging
from typing import Optional

from ..config import Config
from ..emitter import PassthroughEmitter
from ..events import Events
from ..state_processor import StateProcessor
from ..suite import State, Suite
from ..suite_collection import SuiteCollection
from .backend import CaptureBackend, load_backend
from .stats import Stats

log = logging.getLogger(__name__)


class Runner(PassthroughEmitter):
    """Runs states through a capture backend and a state processor.

    Per-state failures are emitted as ERROR and do not stop the run.
    """

    def __init__(
        self,
        config: Config,
        state_processor: StateProcessor,
        backend: Optional[CaptureBackend] = None,
    ):
        """Initialize runner.

        Args:
            config: Validated configuration.
            state_processor: Tester or screen updater.
            backend: Capture backend. Loaded from ``system.capture_backend`` if None.
        """
        super().__init__()
        self.config = config
        self.state_processor = state_processor
        self.backend = backend
        self.stats = Stats()
        self._cancelled = False

    @classmethod
    def create(cls, config: Config, state_processor: StateProcessor) -> "Runner":
        return cls(config, state_processor)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop before the next state. States in progress finish."""
        if not self._cancelled:
            log.debug("run cancelled")
        self._cancelled = True

    async def run(self, suite_collection: SuiteCollection) -> Stats:
        self.stats = Stats()
        self.stats.attach(self)

        try:
            if self.backend is None:
                self.backend = load_backend(self.config)

            self.emit(Events.BEGIN, {
                "config": self.config,
                "total_states_count": sum(len(s.states) for s in suite_collection.all_suites()),
                "browser_ids": self.config.get_browser_ids(),
            })

            for browser_id in self.config.get_browser_ids():
                if self._cancelled:
                    break
                await self._run_session(suite_collection, browser_id)
        finally:
            self.emit(Events.END, self.stats)

        return self.stats

    async def _run_session(self, suite_collection: SuiteCollection, browser_id: str) -> None:
        self.emit(Events.BEGIN_SESSION, {"browser_id": browser_id})
        try:
            for suite in suite_collection.all_suites():
                if self._cancelled:
                    break
                if not suite.has_states or not suite.targets(browser_id):
                    continue
                if not suite_collection.is_enabled(suite, browser_id):
                    continue
                await self._run_suite(suite_collection, suite, browser_id)
        finally:
            self.emit(Events.END_SESSION, {"browser_id": browser_id})

    async def _run_suite(self, suite_collection: SuiteCollection, suite: Suite, browser_id: str) -> None:
        self.emit(Events.BEGIN_SUITE, {"suite": suite, "browser_id": browser_id})
        skipped = suite_collection.is_skipped(suite, browser_id)

        for state in suite.states:
            if self._cancelled:
                break
            await self._run_state(state, browser_id, skipped)

        self.emit(Events.END_SUITE, {"suite": suite, "browser_id": browser_id})

    async def _run_state(self, state: State, browser_id: str, skipped: bool) -> None:
        data = {"state": state, "suite": state.suite, "browser_id": browser_id}

        if skipped:
            self.emit(Events.SKIP_STATE, data)
            return

        self.emit(Events.BEGIN_STATE, data)
        try:
            image = await self.backend.capture(state, self.config.for_browser(browser_id))
            self.emit(Events.CAPTURE, data)
            result = await self.state_processor.exec(state, browser_id, image)
            self.emit(self.state_processor.result_event, result)
        except Exception as e:
            log.debug("state %s failed in %s: %s", state.full_name, browser_id, e)
            self.emit(Events.ERROR, {**data, "error": e})
        finally:
            self.emit(Events.END_STATE, data)
