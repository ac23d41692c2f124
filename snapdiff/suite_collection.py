"""Flattened view of the suite tree that is handed to the runner."""

from typing import Iterable, Iterator, Optional

from .suite import Suite

ALL_BROWSERS = "*"


class SuiteCollection:
    """Ordered top-level suites plus per-browser skip and enable state."""

    def __init__(self, suites: Optional[Iterable[Suite]] = None):
        self._suites: list[Suite] = list(suites or [])
        self._skipped_browsers: set[str] = set()
        # suite -> browser ids (or ALL_BROWSERS) disabled for it
        self._disabled: dict[Suite, set[str]] = {}

    def add(self, suite: Suite) -> "SuiteCollection":
        self._suites.append(suite)
        return self

    def top_level_suites(self) -> list[Suite]:
        return list(self._suites)

    def all_suites(self) -> list[Suite]:
        """All suites, depth first, parents before children."""
        return list(self._walk(self._suites))

    def _walk(self, suites: Iterable[Suite]) -> Iterator[Suite]:
        for suite in suites:
            yield suite
            yield from self._walk(suite.children)

    def skip_browsers(self, browser_ids: Iterable[str]) -> "SuiteCollection":
        """Mark ``browser_ids`` as skipped for every suite."""
        self._skipped_browsers.update(browser_ids)
        return self

    @property
    def skipped_browsers(self) -> list[str]:
        return sorted(self._skipped_browsers)

    def is_skipped(self, suite: Suite, browser_id: str) -> bool:
        return browser_id in self._skipped_browsers or suite.should_skip(browser_id)

    def disable(self, suite: Suite, browser: Optional[str] = None) -> "SuiteCollection":
        """Disable ``suite`` (and its children) for ``browser``, or for all browsers."""
        for item in self._walk([suite]):
            self._disabled.setdefault(item, set()).add(browser or ALL_BROWSERS)
        return self

    def enable(self, suite: Suite, browser: Optional[str] = None) -> "SuiteCollection":
        for item in self._walk([suite]):
            if browser is None:
                self._disabled.pop(item, None)
            else:
                self._disabled.get(item, set()).discard(browser)
        return self

    def disable_all(self) -> "SuiteCollection":
        for suite in self._suites:
            self.disable(suite)
        return self

    def enable_all(self) -> "SuiteCollection":
        self._disabled.clear()
        return self

    def is_enabled(self, suite: Suite, browser_id: str) -> bool:
        disabled = self._disabled.get(suite, set())
        return ALL_BROWSERS not in disabled and browser_id not in disabled

    def clone(self) -> "SuiteCollection":
        """Copy of the collection sharing the same suite objects."""
        collection = SuiteCollection(self._suites)
        collection._skipped_browsers = set(self._skipped_browsers)
        collection._disabled = {k: set(v) for k, v in self._disabled.items()}
        return collection

    def __len__(self) -> int:
        return len(self._suites)

    def __iter__(self) -> Iterator[Suite]:
        return iter(self._suites)
