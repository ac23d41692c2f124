"""Browser id list parsing and validation."""

from typing import Iterable, Optional

import click


def parse_browsers(value: Optional[str]) -> Optional[list[str]]:
    """Split a comma separated browser list, ignoring whitespace.

    Returns:
        List of ids, or None when ``value`` is not set.
    """
    if not value:
        return None
    value = "".join(value.split())
    return [browser for browser in value.split(",") if browser]


def valid_browsers(browsers: Optional[Iterable[str]], known: Iterable[str]) -> list[str]:
    """Ids from ``browsers`` that are present in ``known``, in ``browsers`` order."""
    known = set(known)
    return [b for b in (browsers or []) if b in known]


def unknown_browsers(browsers: Optional[Iterable[str]], known: Iterable[str]) -> list[str]:
    known = set(known)
    return [b for b in (browsers or []) if b not in known]


def warn_unknown_browsers(unknown: list[str], known: list[str]) -> None:
    click.echo(
        f"{click.style('WARNING:', fg='yellow')} Unknown browsers id: {', '.join(unknown)}.\n"
        f"Use one of the browser ids specified in config file: {', '.join(known)}",
        err=True,
    )
