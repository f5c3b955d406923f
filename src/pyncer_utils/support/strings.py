"""String helpers: trim-by-value and multi-needle search."""

from __future__ import annotations

from collections.abc import Iterable


def ltrim_string(value: str, remove: str, once: bool = False) -> str:
    """Strip ``remove`` from the start of ``value``.

    Unlike `str.lstrip`, ``remove`` is matched as a whole string rather than
    as a set of characters.

    Args:
        value: The string to trim.
        remove: The prefix to strip.
        once: Strip at most one occurrence instead of every repetition.

    Returns:
        The trimmed string.
    """
    if value == remove:
        return ""
    if not remove:
        return value

    while value.startswith(remove):
        value = value[len(remove) :]
        if once:
            break
    return value


def rtrim_string(value: str, remove: str, once: bool = False) -> str:
    """Strip ``remove`` from the end of ``value``; see `ltrim_string`."""
    if value == remove:
        return ""
    if not remove:
        return value

    while value.endswith(remove):
        value = value[: -len(remove)]
        if once:
            break
    return value


def pos_array(
    haystack: str, needles: Iterable[str], offset: int = 0
) -> tuple[str, int] | None:
    """Find the earliest occurrence of any of ``needles`` in ``haystack``.

    When two needles match at the same index the longer one wins.

    Args:
        haystack: The string to search in.
        needles: Candidate substrings.
        offset: Index to start searching from.

    Returns:
        A ``(needle, index)`` tuple, or None if no needle occurs.
    """
    found: tuple[str, int] | None = None

    for needle in needles:
        index = haystack.find(needle, offset)
        if index == -1:
            continue

        if found is None or index < found[1]:
            found = (needle, index)
        elif index == found[1] and len(needle) > len(found[0]):
            found = (needle, index)

    return found
