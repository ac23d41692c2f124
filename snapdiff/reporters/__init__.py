"""Reporter registry and attachment.

A builtin reporter is a module in this package exposing
``reporter(runner, path=None)``. Reporters are attached to the runner before
the run starts and subscribe to whatever runner events they need.
"""

import importlib
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from ..errors import UnknownReporterError

ReporterFn = Callable[..., Any]


@dataclass(frozen=True)
class NamedReporter:
    """Builtin reporter referenced by name."""
    name: str


@dataclass(frozen=True)
class PathReporter:
    """Builtin reporter with an output path."""
    name: str
    path: Optional[str] = None


@dataclass(frozen=True)
class CallableReporter:
    """Custom reporter function called with the runner."""
    fn: ReporterFn


ReporterDescriptor = Union[NamedReporter, PathReporter, CallableReporter]


def resolve(name: str) -> ReporterFn:
    """Look up a builtin reporter by name.

    Raises:
        UnknownReporterError: If there is no such reporter.
    """
    module_name = f"{__name__}.{name}"
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name == module_name:
            raise UnknownReporterError(name) from e
        raise

    try:
        return module.reporter
    except AttributeError:
        raise UnknownReporterError(name) from None


def as_descriptor(reporter: Any) -> ReporterDescriptor:
    """Turn a name, a ``{name, path}`` mapping or a callable into a descriptor.

    Raises:
        TypeError: For any other value.
    """
    if isinstance(reporter, (NamedReporter, PathReporter, CallableReporter)):
        return reporter
    if isinstance(reporter, str):
        return NamedReporter(reporter)
    if isinstance(reporter, Mapping) and "name" in reporter:
        return PathReporter(reporter["name"], reporter.get("path"))
    if callable(reporter):
        return CallableReporter(reporter)
    raise TypeError("Reporter must be a name, a descriptor, or a callable")


async def apply_reporter(runner, reporter: Any) -> None:
    """Attach ``reporter`` to ``runner``, awaiting asynchronous reporters."""
    descriptor = as_descriptor(reporter)

    if isinstance(descriptor, NamedReporter):
        result = resolve(descriptor.name)(runner)
    elif isinstance(descriptor, PathReporter):
        result = resolve(descriptor.name)(runner, descriptor.path)
    else:
        result = descriptor.fn(runner)

    if inspect.isawaitable(result):
        await result


__all__ = [
    "CallableReporter",
    "NamedReporter",
    "PathReporter",
    "ReporterDescriptor",
    "apply_reporter",
    "as_descriptor",
    "resolve",
]
