"""Suite tree data models.

A suite is a named group of states. Suites nest; the tree produced by the
test reader hangs off an unnamed root suite.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Action:
    """A single browser action performed before a state is captured."""
    type: str
    target: Optional[str] = None
    text: Optional[str] = None
    value: Optional[str] = None
    ms: Optional[int] = None

    def __post_init__(self):
        self.type = self.type.lower()

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(eq=False)
class State:
    """A capturable visual checkpoint within a suite."""
    name: str
    suite: "Suite"
    actions: list[Action] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.suite.full_name}.{self.name}"

    def should_skip(self, browser_id: str) -> bool:
        return self.suite.should_skip(browser_id)

    def __repr__(self) -> str:
        return f"State({self.full_name!r})"


@dataclass(eq=False)
class Suite:
    """A named group of states and child suites."""
    name: str
    parent: Optional["Suite"] = None
    children: list["Suite"] = field(default_factory=list)
    states: list[State] = field(default_factory=list)
    url: Optional[str] = None
    capture_elements: list[str] = field(default_factory=list)
    browsers: Optional[list[str]] = None
    skipped: list[str] = field(default_factory=list)

    @classmethod
    def create_root(cls) -> "Suite":
        return cls(name="")

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def path(self) -> list[str]:
        """Names from the top-level suite down to this one."""
        if self.parent is None:
            return [self.name] if self.name else []
        return self.parent.path + [self.name]

    @property
    def full_name(self) -> str:
        return ".".join(self.path)

    @property
    def has_states(self) -> bool:
        return len(self.states) > 0

    def add_child(self, suite: "Suite") -> "Suite":
        suite.parent = self
        self.children.append(suite)
        return suite

    def remove_child(self, suite: "Suite") -> None:
        if suite in self.children:
            self.children.remove(suite)
            suite.parent = None

    def add_state(self, name: str, actions: Optional[list[Action]] = None) -> State:
        state = State(name=name, suite=self, actions=actions or [])
        self.states.append(state)
        return state

    def targets(self, browser_id: str) -> bool:
        """Whether this suite runs in ``browser_id`` at all."""
        return self.browsers is None or browser_id in self.browsers

    def should_skip(self, browser_id: str) -> bool:
        """Whether this suite or one of its ancestors skips ``browser_id``."""
        if browser_id in self.skipped:
            return True
        return self.parent is not None and self.parent.should_skip(browser_id)

    def __repr__(self) -> str:
        return f"Suite({self.full_name!r})"
