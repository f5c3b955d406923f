"""Unit tests for the trim-by-value and multi-needle search helpers."""

import pytest

from pyncer_utils.support.strings import ltrim_string, pos_array, rtrim_string


@pytest.mark.parametrize(
    "value, remove, once, expected",
    [
        ("abababc", "ab", False, "c"),
        ("abababc", "ab", True, "ababc"),
        ("ab", "ab", False, ""),
        ("abc", "", False, "abc"),
        ("abc", "x", False, "abc"),
    ],
)
def test_ltrim_string(value: str, remove: str, once: bool, expected: str) -> None:
    """Whole-string prefixes are removed, optionally only once."""
    assert ltrim_string(value, remove, once) == expected


@pytest.mark.parametrize(
    "value, remove, once, expected",
    [
        ("cababab", "ab", False, "c"),
        ("cababab", "ab", True, "cabab"),
        ("ab", "ab", True, ""),
        ("abc", "", False, "abc"),
        ("aaa", "aa", False, "a"),
    ],
)
def test_rtrim_string(value: str, remove: str, once: bool, expected: str) -> None:
    """Whole-string suffixes are removed, optionally only once."""
    assert rtrim_string(value, remove, once) == expected


def test_ltrim_string_is_not_a_character_set() -> None:
    """Unlike ``str.lstrip``, characters are not removed one by one."""
    assert ltrim_string("baab", "ab") == "baab"
    assert "baab".lstrip("ab") == ""


@pytest.mark.parametrize(
    "haystack, needles, offset, expected",
    [
        ("host/path?q#f", ("/", "?", "#"), 0, ("/", 4)),
        ("host?q/p", ("/", "?", "#"), 0, ("?", 4)),
        ("a/b/c", ("/",), 2, ("/", 3)),
        ("abc", ("/", "?"), 0, None),
        ("x://y", (":", "://"), 0, ("://", 1)),
        ("", ("/",), 0, None),
    ],
)
def test_pos_array(
    haystack: str,
    needles: tuple[str, ...],
    offset: int,
    expected: tuple[str, int] | None,
) -> None:
    """The earliest needle wins; ties go to the longer needle."""
    assert pos_array(haystack, needles, offset) == expected
