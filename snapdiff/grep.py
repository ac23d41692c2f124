"""Suite tree pruning by full suite name."""

import re
from typing import Pattern, Union

from .suite import Suite


def compile_grep(grep: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(grep, str):
        return re.compile(grep)
    return grep


def apply_grep(grep: Union[str, Pattern[str]], suite: Suite) -> Suite:
    """Remove every suite whose full name does not match ``grep``.

    Suites with states are kept only if their full name matches. Containers
    are kept only while some descendant survives. The suite passed in is
    never removed itself unless it has a parent.

    Returns:
        The same suite, pruned in place.
    """
    _prune(compile_grep(grep), suite)
    return suite


def _prune(pattern: Pattern[str], suite: Suite) -> None:
    if not suite.has_states:
        # children may remove themselves while we iterate
        for child in list(suite.children):
            _prune(pattern, child)
    elif suite.parent and not pattern.search(suite.full_name):
        suite.parent.remove_child(suite)
        return

    if not suite.has_states and not suite.children and suite.parent:
        suite.parent.remove_child(suite)
