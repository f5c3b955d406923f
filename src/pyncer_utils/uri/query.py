"""Query-string parsing and building with bracketed nested keys.

A *query structure* is a dict whose values are scalars, nested dicts or
lists. On the wire, nesting is expressed with bracket notation:

    a=1&b[c]=2&d[]=3&d[]=4   <->   {"a": "1", "b": {"c": "2"}, "d": ["3", "4"]}

Parsing
-------
The string is split and percent-decoded by `urllib.parse.parse_qsl`
(lenient, ``+`` is a space, blank values kept). Each decoded key is then
split into its bracket path (``b[c][]`` → ``["b", "c", ""]``) and assigned
into the result; an empty segment appends at the next integer index. The
last value for a key wins. Finally every nested dict whose keys are exactly
``"0" … "n-1"`` in order is turned into a list. The top level always stays
a dict.

Building
--------
The structure is walked recursively. A nested value at key ``k`` under
prefix ``p`` gets the prefix ``p[k]``; lists use their positions as keys.
Leaves render as ``key=value`` with these rules: ``None`` emits the bare
key, ``False`` emits ``0``, ``True`` emits ``1``, everything else is
``str()``-ed. Keys (brackets included) and values are percent-encoded.

The two halves are a matched pair: for a structure made of non-empty
containers and string leaves, ``parse_uri_query(build_uri_query(q)) == q``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias
from urllib.parse import parse_qsl

from pyncer_utils.support.structures import merge_recursive
from pyncer_utils.uri.encoding import EncodeMethod, encode_uri

QueryStructure: TypeAlias = dict[str, Any]
QueryInput: TypeAlias = str | Mapping[Any, Any] | Iterable[tuple[Any, Any]]

_INTEGER_KEY = re.compile(r"0|-?[1-9][0-9]*")


# ============================================================================
#                               Parsing
# ============================================================================


def _split_key(key: str) -> list[str] | None:
    """Split ``a[b][]`` into ``["a", "b", ""]``.

    Returns None for keys that cannot be assigned (empty base name). A key
    whose first ``[`` is never closed is taken literally. Text after the
    last well-formed bracket group is ignored.
    """
    start = key.find("[")
    if start == -1:
        return [key] if key else None

    if key.find("]", start) == -1:
        return [key]

    base = key[:start]
    if not base:
        return None

    segments = [base]
    position = start
    while position < len(key) and key[position] == "[":
        end = key.find("]", position)
        if end == -1:
            break
        segments.append(key[position + 1 : end])
        position = end + 1

    return segments


def _next_index(node: dict[str, Any]) -> str:
    indexes = [int(key) for key in node if _INTEGER_KEY.fullmatch(key)]
    return str(max(max(indexes, default=-1) + 1, 0))


def _assign(root: dict[str, Any], segments: list[str], value: str) -> None:
    node = root
    for segment in segments[:-1]:
        key = segment if segment != "" else _next_index(node)
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child

    last = segments[-1]
    node[last if last != "" else _next_index(node)] = value


def _normalize(value: Any) -> Any:
    if not isinstance(value, dict):
        return value

    normalized = {key: _normalize(item) for key, item in value.items()}
    if list(normalized) == [str(index) for index in range(len(normalized))]:
        return list(normalized.values())
    return normalized


def parse_uri_query(query: str) -> QueryStructure:
    """Parse a query string into a query structure.

    A single leading ``?`` is ignored. Malformed input never raises; it
    yields whatever could be parsed.

    Examples:
        >>> parse_uri_query("?test=1&test=2")
        {'test': '2'}
        >>> parse_uri_query("test[][foo]=1&test[][bar]=2")
        {'test': [{'foo': '1'}, {'bar': '2'}]}
    """
    query = query.removeprefix("?")

    result: dict[str, Any] = {}
    if not query:
        return result

    for key, value in parse_qsl(query, keep_blank_values=True):
        segments = _split_key(key)
        if segments is None:
            continue
        _assign(result, segments, value)

    return {key: _normalize(item) for key, item in result.items()}


# ============================================================================
#                               Building
# ============================================================================


def _scalar_to_string(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def _build_parts(
    prefix: str, value: Any, encode_method: EncodeMethod, parts: list[str]
) -> None:
    if isinstance(value, Mapping):
        items: Iterable[tuple[Any, Any]] = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        key = encode_uri(prefix, encode_method)
        if value is None:
            parts.append(key)
        else:
            parts.append(f"{key}={encode_uri(_scalar_to_string(value), encode_method)}")
        return

    for key, item in items:
        _build_parts(f"{prefix}[{key}]", item, encode_method, parts)


def build_uri_query(
    query: Mapping[Any, Any], encode_method: EncodeMethod = EncodeMethod.RFC3986
) -> str:
    """Build a query string from a query structure.

    Args:
        query: Mapping of keys to scalars, nested mappings or lists.
        encode_method: Percent-encoding flavour for keys and values.

    Returns:
        The query string, without a leading ``?``.

    Example:
        >>> build_uri_query({"test": [{"foo": "1"}, {"bar": "2"}]})
        'test%5B0%5D%5Bfoo%5D=1&test%5B1%5D%5Bbar%5D=2'
    """
    parts: list[str] = []
    for key, value in query.items():
        _build_parts(str(key), value, encode_method, parts)
    return "&".join(parts)


# ============================================================================
#                               Merging
# ============================================================================


def merge_uri_queries(*queries: QueryInput) -> QueryStructure:
    """Deep-merge several queries from left to right.

    Strings are parsed. Anything else (a mapping, or an iterable of key/value
    pairs) is built and re-parsed first so that its keys and list shapes are
    normalized exactly like a parsed string's.

    Example:
        >>> merge_uri_queries("a[x]=1&a[y]=2", {"a": {"x": 3}}, "b=4")
        {'a': {'x': '3', 'y': '2'}, 'b': '4'}
    """
    parsed: list[QueryStructure] = []
    for query in queries:
        if isinstance(query, str):
            parsed.append(parse_uri_query(query))
            continue

        mapping = query if isinstance(query, Mapping) else dict(query)
        parsed.append(parse_uri_query(build_uri_query(mapping)))

    return merge_recursive(*parsed)
