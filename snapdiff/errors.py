"""Error types raised by snapdiff."""

from typing import Optional, Union


class SnapdiffError(Exception):
    """Base error for snapdiff.

    Can be built from a message or from another exception, in which case
    the original exception is kept as ``__cause__``.
    """

    def __init__(self, error: Union[str, BaseException]):
        super().__init__(str(error))
        if isinstance(error, BaseException):
            self.__cause__ = error


class ConfigError(SnapdiffError):
    """Invalid or malformed configuration."""


class DiscoveryError(SnapdiffError):
    """A test file could not be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{message} ({path})"
        super().__init__(message)
        self.path = path


class UnknownReporterError(SnapdiffError):
    """Requested builtin reporter does not exist."""

    def __init__(self, name: str):
        super().__init__(f"No such reporter: {name}")
        self.name = name


class PluginError(SnapdiffError):
    """Declared plugin could not be loaded."""


class NoRefImageError(SnapdiffError):
    """No reference screenshot exists for a state."""

    def __init__(self, reference_path: str):
        super().__init__(f"Can not find reference image at {reference_path}")
        self.reference_path = reference_path
