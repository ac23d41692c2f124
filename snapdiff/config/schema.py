"""Configuration data models.

Top-level browser options act as defaults for every browser section.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from ..errors import ConfigError

DEFAULT_SCREENSHOT_PATH = "{screenshots_dir}/{suite_path}/{state}/{browser}.png"

# Options every browser section inherits from the top level.
BROWSER_OPTIONS = (
    "root_url",
    "grid_url",
    "screenshots_dir",
    "screenshot_path",
    "desired_capabilities",
)


@dataclass
class SystemConfig:
    """Options that are not specific to a browser."""
    debug: bool = False
    temp_dir: Optional[str] = None
    plugins: dict[str, Any] = field(default_factory=dict)
    project_root: str = "."
    source_root: str = "snapdiff"
    capture_backend: Optional[str] = None


@dataclass
class BrowserConfig:
    """Options of a single browser target."""
    id: str
    desired_capabilities: dict[str, Any] = field(default_factory=dict)
    root_url: Optional[str] = None
    grid_url: Optional[str] = None
    screenshots_dir: str = "screens"
    screenshot_path: str = DEFAULT_SCREENSHOT_PATH

    def get_screenshot_path(self, suite, state_name: str) -> str:
        """Reference screenshot location for ``state_name`` of ``suite``."""
        return self.screenshot_path.format(
            screenshots_dir=self.screenshots_dir,
            suite_path=os.path.join(*suite.path) if suite.path else "",
            state=state_name,
            browser=self.id,
        )


@dataclass
class Config:
    """Validated configuration."""
    system: SystemConfig
    browsers: dict[str, BrowserConfig]

    def get_browser_ids(self) -> list[str]:
        return list(self.browsers)

    def for_browser(self, browser_id: str) -> BrowserConfig:
        try:
            return self.browsers[browser_id]
        except KeyError:
            raise ConfigError(f"Unknown browser id: {browser_id}") from None


@dataclass
class ValidationError:
    """A single configuration problem."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
