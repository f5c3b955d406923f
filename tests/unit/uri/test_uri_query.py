"""Unit tests for query-string parsing, building and merging."""

from typing import Any

import pytest

from pyncer_utils.uri.encoding import EncodeMethod
from pyncer_utils.uri.query import build_uri_query, merge_uri_queries, parse_uri_query

# ============================================================================
#                               Parsing
# ============================================================================


@pytest.mark.parametrize(
    "query, expected",
    [
        ("?test=1&test=2", {"test": "2"}),
        ("test[]=1&test[]=2", {"test": ["1", "2"]}),
        ("test=1&foo=bar", {"test": "1", "foo": "bar"}),
        ("test[foo]=1&test[bar]=2", {"test": {"foo": "1", "bar": "2"}}),
        ("test[][foo]=1&test[][bar]=2", {"test": [{"foo": "1"}, {"bar": "2"}]}),
        ("a[b][c]=1", {"a": {"b": {"c": "1"}}}),
        ("a[b]=1&a[b]=2", {"a": {"b": "2"}}),
        ("0=a&1=b", {"0": "a", "1": "b"}),
    ],
)
def test_parse_uri_query(query: str, expected: dict[str, Any]) -> None:
    """Bracketed keys nest; the last value wins; sequential keys become lists."""
    assert parse_uri_query(query) == expected


@pytest.mark.parametrize(
    "query, expected",
    [
        ("", {}),
        ("?", {}),
        ("flag", {"flag": ""}),
        ("a+b=c%20d", {"a b": "c d"}),
        ("a[x=1", {"a[x": "1"}),
        ("[x]=1&y=2", {"y": "2"}),
        ("a=1&a[]=2", {"a": ["2"]}),
        ("a[b]junk=1", {"a": {"b": "1"}}),
    ],
)
def test_parse_uri_query_is_lenient(query: str, expected: dict[str, Any]) -> None:
    """Malformed or unusual input never raises."""
    assert parse_uri_query(query) == expected


def test_parse_only_strips_one_question_mark() -> None:
    """A second leading ``?`` belongs to the first key."""
    assert parse_uri_query("??a=1") == {"?a": "1"}


# ============================================================================
#                               Building
# ============================================================================


def test_build_uri_query_mixed_structure() -> None:
    """Nested keys get bracket prefixes; scalars follow the leaf rules."""
    query = {
        "test": {"foo": 3, "bar": 2},
        "test2": "yes yes",
        "test3": "",
        0: {"1": True, "2": False, 3: None},
    }
    assert build_uri_query(query) == (
        "test%5Bfoo%5D=3&test%5Bbar%5D=2&test2=yes%20yes&test3="
        "&0%5B1%5D=1&0%5B2%5D=0&0%5B3%5D"
    )


@pytest.mark.parametrize(
    "query, expected",
    [
        (
            {"test": [{"foo": "1"}, {"bar": "2"}]},
            "test%5B0%5D%5Bfoo%5D=1&test%5B1%5D%5Bbar%5D=2",
        ),
        ({"test": [["1", "2"]]}, "test%5B0%5D%5B0%5D=1&test%5B0%5D%5B1%5D=2"),
        ({"a": None, "b": False, "c": True, "d": 5}, "a&b=0&c=1&d=5"),
        ({"t": ("x", "y")}, "t%5B0%5D=x&t%5B1%5D=y"),
        ({}, ""),
        ({"empty": []}, ""),
    ],
)
def test_build_uri_query(query: dict[Any, Any], expected: str) -> None:
    """Lists use positional keys; None renders as a bare key."""
    assert build_uri_query(query) == expected


@pytest.mark.parametrize(
    "method, expected",
    [
        (EncodeMethod.RFC3986, "q=a%20b&k%20k=%26"),
        (EncodeMethod.RFC1738, "q=a+b&k+k=%26"),
    ],
)
def test_build_uri_query_encode_method(method: EncodeMethod, expected: str) -> None:
    """Spaces follow the selected encoding; reserved characters are escaped."""
    assert build_uri_query({"q": "a b", "k k": "&"}, method) == expected


# ============================================================================
#                               Merging
# ============================================================================


def test_merge_uri_queries() -> None:
    """Strings and mappings merge deeply from left to right."""
    merged = merge_uri_queries(
        "test[foo]=1&test[bar]=2",
        "test[foo]=3",
        {"test2": "yes"},
        "0[1]=1&0[2]=1",
        "0[2]=3",
    )
    assert merged == {
        "test": {"foo": "3", "bar": "2"},
        "test2": "yes",
        "0": {"1": "1", "2": "3"},
    }


def test_merge_uri_queries_normalizes_mappings() -> None:
    """Mappings are rebuilt and re-parsed, so their scalars become strings."""
    merged = merge_uri_queries({"a": 1, "b": True, "c": [1, 2]}, "a=9")
    assert merged == {"a": "9", "b": "1", "c": ["1", "2"]}


def test_merge_uri_queries_accepts_pairs() -> None:
    """An iterable of key/value pairs is treated like a mapping."""
    assert merge_uri_queries([("a", "1"), ("b", "2")], "b=3") == {"a": "1", "b": "3"}


def test_merge_uri_queries_lists_merge_positionally() -> None:
    """A later list overrides the earlier one position by position."""
    assert merge_uri_queries("l[]=a&l[]=b&l[]=c", "l[]=x") == {"l": ["x", "b", "c"]}


def test_merge_uri_queries_without_arguments() -> None:
    """Merging nothing yields an empty structure."""
    assert not merge_uri_queries()
