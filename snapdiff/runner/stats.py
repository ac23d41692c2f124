"""Run statistics collected from runner events."""

from dataclasses import dataclass, field

from ..emitter import EventEmitter
from ..events import Events

STAT_KEYS = ("total", "updated", "passed", "failed", "skipped", "errored")


@dataclass
class Counters:
    """Counts of state outcomes."""
    total: int = 0
    updated: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    errored: int = 0

    def as_dict(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in STAT_KEYS}


@dataclass
class Stats(Counters):
    """Overall counters plus counters per browser."""
    per_browser: dict[str, Counters] = field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0 or self.errored > 0

    def add(self, key: str, browser_id: str) -> None:
        browser = self.per_browser.setdefault(browser_id, Counters())
        for counters in (self, browser):
            setattr(counters, key, getattr(counters, key) + 1)
            counters.total += 1

    def attach(self, emitter: EventEmitter) -> None:
        """Count results emitted by ``emitter``."""
        emitter.on(Events.TEST_RESULT, lambda r: self.add("passed" if r.equal else "failed", r.browser_id))
        emitter.on(Events.UPDATE_RESULT, lambda r: self.add("updated" if r.updated else "passed", r.browser_id))
        emitter.on(Events.SKIP_STATE, lambda data: self.add("skipped", data["browser_id"]))
        emitter.on(Events.ERROR, lambda data: self.add("errored", data["browser_id"]))

    def as_dict(self) -> dict:
        result = super().as_dict()
        result["per_browser"] = {k: v.as_dict() for k, v in self.per_browser.items()}
        return result
