"""Snapdiff orchestrator.

Owns the configuration, loads plugins, reads tests, resolves browsers and
hands the run to a runner. Every public operation first waits for the
one-time INIT broadcast and, when finished, raises the critical error
recorded by ``halt`` if there is one.
"""

import asyncio
import logging
import os
import threading
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Pattern, Union

import click

from . import temp
from .browsers import parse_browsers, unknown_browsers, valid_browsers, warn_unknown_browsers
from .config import Config, parse_config, read_raw_config
from .emitter import EventEmitter, PassthroughEmitter, Unsubscribe
from .errors import SnapdiffError
from .events import ALL_EVENTS, Events
from .grep import apply_grep
from .plugins import PLUGIN_PREFIX, load_plugins
from .reporters import apply_reporter
from .runner import Runner, Stats
from .signal_handler import SignalHandler, signal_handler
from .state_processor import StateProcessor
from .suite_collection import SuiteCollection
from .test_reader import read_tests

log = logging.getLogger(__name__)

BROWSERS_ENV = "SNAPDIFF_BROWSERS"
SKIP_BROWSERS_ENV = "SNAPDIFF_SKIP_BROWSERS"
DEFAULT_HALT_TIMEOUT = 60000

Paths = Union[None, str, Path, Iterable[Union[str, Path]], SuiteCollection]
Grep = Union[None, str, Pattern[str]]


def setup_log(debug: bool) -> None:
    """Enable debug output of every ``snapdiff`` logger."""
    if not debug:
        return
    logger = logging.getLogger("snapdiff")
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
        logger.addHandler(handler)


def force_shutdown() -> None:
    click.echo(click.style("Forcing shutdown...", fg="red"), err=True)
    os._exit(1)


class Snapdiff(PassthroughEmitter):
    """Visual regression test orchestrator."""

    events = Events
    SuiteCollection = SuiteCollection

    def __init__(
        self,
        config: Union[Config, str, Path, Mapping[str, Any]],
        allow_overrides: Optional[Mapping[str, bool]] = None,
        *,
        runner_factory: Optional[Callable[[Config, StateProcessor], Runner]] = None,
        interrupts: Optional[EventEmitter] = None,
        environ: Optional[Mapping[str, str]] = None,
        argv: Optional[list[str]] = None,
    ):
        """Initialize orchestrator and load plugins.

        Args:
            config: Config object, path to a YAML file, or raw mapping.
            allow_overrides: ``{"env": bool, "cli": bool}`` config overrides.
            runner_factory: Builds a runner for a state processor. Defaults to ``Runner.create``.
            interrupts: INTERRUPT source. Defaults to the process signal handler.
            environ: Source of SNAPDIFF_BROWSERS/SNAPDIFF_SKIP_BROWSERS. Defaults to ``os.environ``.
            argv: Arguments read for ``--<option>`` overrides. Defaults to ``sys.argv[1:]``.

        Raises:
            ConfigError: If the configuration is invalid.
            PluginError: If a declared plugin cannot be loaded.
        """
        super().__init__()

        if isinstance(config, Config):
            self.config = config
        else:
            self.config = parse_config(config, allow_overrides, environ=environ, argv=argv)

        self._runner_factory = runner_factory or Runner.create
        self._interrupts = interrupts
        self._environ = os.environ if environ is None else environ

        self._init_task: Optional[asyncio.Future] = None
        self._runner: Optional[Runner] = None
        self._critical_error: Optional[SnapdiffError] = None
        self._shutdown_timer: Optional[threading.Timer] = None

        setup_log(self.config.system.debug)
        self._load_plugins()

    @classmethod
    def create(cls, config, allow_overrides=None, **kwargs) -> "Snapdiff":
        return cls(config, allow_overrides, **kwargs)

    @staticmethod
    def read_raw_config(file_path: Union[str, Path]) -> dict[str, Any]:
        return read_raw_config(file_path)

    def extend_cli(self, parser) -> None:
        self.emit(Events.CLI, parser)

    def get_screenshot_path(self, suite, state_name: str, browser_id: str) -> str:
        return self.config.for_browser(browser_id).get_screenshot_path(suite, state_name)

    def get_browser_capabilities(self, browser_id: str) -> dict[str, Any]:
        return self.config.for_browser(browser_id).desired_capabilities

    @property
    def browser_ids(self) -> list[str]:
        return self.config.get_browser_ids()

    def get_valid_browsers(self, browsers: Optional[Iterable[str]]) -> list[str]:
        return valid_browsers(browsers, self.browser_ids)

    def check_unknown_browsers(self, browsers: Optional[Iterable[str]]) -> list[str]:
        """Warn about ids in ``browsers`` that are not configured.

        Returns:
            The unknown ids.
        """
        unknown = unknown_browsers(browsers, self.browser_ids)
        if unknown:
            warn_unknown_browsers(unknown, self.browser_ids)
        return unknown

    @property
    def critical_error(self) -> Optional[SnapdiffError]:
        return self._critical_error

    async def test(
        self,
        paths: Paths = None,
        *,
        reporters: Iterable[Any] = (),
        browsers: Optional[list[str]] = None,
        grep: Grep = None,
    ) -> Optional[Stats]:
        """Compare every state with its reference screenshot.

        Returns:
            Statistics emitted by the runner with END.
        """
        return await self._exec(lambda: self._run(
            StateProcessor.create_tester(self.config),
            paths, reporters=reporters, browsers=browsers, grep=grep,
        ))

    async def update(
        self,
        paths: Paths = None,
        *,
        reporters: Iterable[Any] = (),
        browsers: Optional[list[str]] = None,
        grep: Grep = None,
        diff: bool = False,
        new: bool = False,
    ) -> Optional[Stats]:
        """Capture reference screenshots. See ScreenUpdater for ``diff``/``new``."""
        return await self._exec(lambda: self._run(
            StateProcessor.create_screen_updater(self.config, {"diff": diff, "new": new}),
            paths, reporters=reporters, browsers=browsers, grep=grep,
        ))

    async def read_tests(
        self,
        paths: Paths = None,
        *,
        browsers: Optional[list[str]] = None,
        grep: Grep = None,
    ) -> SuiteCollection:
        return await self._exec(lambda: self._read_tests(paths, browsers=browsers, grep=grep))

    def halt(self, error: Union[str, BaseException], timeout: int = DEFAULT_HALT_TIMEOUT) -> None:
        """Cancel the active run and record ``error`` as the critical error.

        Unless ``timeout`` (milliseconds) is 0, the process is terminated
        after ``timeout`` if it is still alive. A later halt replaces the
        pending termination.
        """
        if self._runner is not None:
            self._runner.cancel()

        self._critical_error = SnapdiffError(error)
        log.debug("halted: %s", self._critical_error)

        if self._shutdown_timer is not None:
            self._shutdown_timer.cancel()
            self._shutdown_timer = None

        if timeout == 0:
            return

        timer = threading.Timer(timeout / 1000, force_shutdown)
        timer.daemon = True
        timer.start()
        self._shutdown_timer = timer

    async def _exec(self, fn: Callable[[], Awaitable[Any]]) -> Any:
        try:
            await self._init()
            return await fn()
        finally:
            if self._critical_error is not None:
                raise self._critical_error

    def _init(self) -> asyncio.Future:
        # concurrent first calls share the same INIT broadcast
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self.emit_and_wait(Events.INIT))
        return self._init_task

    def _load_plugins(self) -> None:
        load_plugins(self, self.config, self.config.system.plugins, PLUGIN_PREFIX)

    async def _read_tests(self, paths: Paths, browsers=None, grep: Grep = None) -> SuiteCollection:
        if isinstance(paths, (str, Path)):
            paths = [paths]

        root_suite = await read_tests(self, self.config, paths=paths, browsers=browsers)
        if grep:
            apply_grep(grep, root_suite)

        suite_collection = SuiteCollection(root_suite.children)
        self.emit(Events.AFTER_TESTS_READ, {"suite_collection": suite_collection})
        return suite_collection

    async def _get_tests(self, source: Paths, **options) -> SuiteCollection:
        if isinstance(source, SuiteCollection):
            return source
        return await self._read_tests(source, **options)

    async def _run(
        self,
        state_processor: StateProcessor,
        paths: Paths = None,
        reporters: Iterable[Any] = (),
        browsers: Optional[list[str]] = None,
        grep: Grep = None,
    ) -> Optional[Stats]:
        temp.init(self.config.system.temp_dir)

        runner = self._runner = self._runner_factory(self.config, state_processor)
        if browsers is None:
            browsers = parse_browsers(self._environ.get(BROWSERS_ENV))
        skip_browsers = parse_browsers(self._environ.get(SKIP_BROWSERS_ENV))

        unsubscribes = [
            self._pass_through_events(runner),
            self._subscribe_to_interrupts(runner),
        ]
        try:
            if browsers is not None:
                self.check_unknown_browsers(browsers)

            suite_collection = await self._get_tests(paths, browsers=browsers, grep=grep)

            if skip_browsers:
                self.check_unknown_browsers(skip_browsers)
            suite_collection.skip_browsers(self.get_valid_browsers(skip_browsers))

            for reporter in reporters:
                await apply_reporter(runner, reporter)

            stats = None

            def on_end(data):
                nonlocal stats
                stats = data

            runner.on(Events.END, on_end)

            await runner.run(suite_collection)
            return stats
        finally:
            for unsubscribe in unsubscribes:
                unsubscribe()

    def _pass_through_events(self, runner: Runner) -> Unsubscribe:
        return self.passthrough_event(runner, ALL_EVENTS)

    def _subscribe_to_interrupts(self, runner: Runner) -> Unsubscribe:
        interrupts = self._interrupts
        if interrupts is None:
            signal_handler.install()
            interrupts = signal_handler

        def on_interrupt(data):
            self.emit(Events.INTERRUPT, data)
            runner.cancel()

        unsubscribe = interrupts.on(Events.INTERRUPT, on_interrupt)

        def unsubscribe_and_reset():
            unsubscribe()
            # the next run forwards its first signal instead of aborting
            if isinstance(interrupts, SignalHandler):
                interrupts.reset()

        return unsubscribe_and_reset
