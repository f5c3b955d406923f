"""Relative/absolute URI transformations and semantic URI equality."""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit

from pyncer_utils.errors import InvalidUriError
from pyncer_utils.support.strings import pos_array
from pyncer_utils.uri.paths import SCHEME_SEPARATOR
from pyncer_utils.uri.query import parse_uri_query

PATH_DELIMITERS = ("/", "?", "#")
WWW_PREFIX = "www."


def _strip_scheme(uri: str) -> str:
    """Return everything after ``//`` (or the whole string if there is none)."""
    position = uri.find("//")
    return uri if position == -1 else uri[position + 2 :]


def _host_boundary(uri_domain: str, host: str) -> int | None:
    """Return the index just past ``host`` if ``uri_domain`` starts with it on a boundary.

    ``example.com`` matches ``example.com/a`` and ``example.com?x`` but not
    ``example.comm``.
    """
    if not host or not uri_domain.startswith(host):
        return None
    end = len(host)
    if end < len(uri_domain) and uri_domain[end] not in PATH_DELIMITERS:
        return None
    return end


def relative_uri(uri: str, to: str | None = None) -> str:
    """Convert ``uri`` to a host-relative URI.

    With ``to`` (a base host or URL), a ``uri`` on the same host (ignoring the
    scheme and a leading ``www.``) becomes its path/query/fragment part. A
    ``uri`` on another host is returned unchanged; a schemeless ``uri`` that
    looks like a host (``example.org/a``) gets ``http://`` and any other
    schemeless value gets a leading ``/``.

    Without ``to``, the scheme and host are always dropped.

    Examples:
        >>> relative_uri("https://pyncer.com/core", "https://pyncer.com")
        '/core'
        >>> relative_uri("https://pyncer.com/core", "https://pyncer.org")
        'https://pyncer.com/core'
        >>> relative_uri("https://pyncer.com/core")
        '/core'
    """
    if to:
        host = _strip_scheme(to).rstrip("/").removeprefix(WWW_PREFIX)
        uri_domain = _strip_scheme(uri)
        has_scheme = uri_domain != uri
        uri_domain = uri_domain.removeprefix(WWW_PREFIX)

        end = _host_boundary(uri_domain, host)
        if end is not None:
            return uri_domain[end:] or "/"

        if not has_scheme and uri[:1] not in PATH_DELIMITERS:
            found = pos_array(uri, PATH_DELIMITERS)
            candidate_host = uri if found is None else uri[: found[1]]

            # a dot before the first delimiter means there is a host
            if "." in candidate_host:
                return "http://" + uri
            return "/" + uri

        return uri

    _, separator, rest = uri.partition(SCHEME_SEPARATOR)
    if separator:
        uri = rest

    found = pos_array(uri, PATH_DELIMITERS)
    if found is None:
        return "/"
    return uri[found[1] :] or "/"


def absolute_uri(uri: str, to: str) -> str:
    """Prefix a relative ``uri`` with the base ``to``.

    URIs that already carry a scheme are returned unchanged.

    Examples:
        >>> absolute_uri("core", "https://pyncer.com/")
        'https://pyncer.com/core'
    """
    if SCHEME_SEPARATOR in uri:
        return uri
    return to.rstrip("/") + "/" + uri.lstrip("/")


def _host(netloc: str) -> str | None:
    """Extract the host, as written, from a netloc (no user info, no port)."""
    host = netloc.rpartition("@")[2]
    if host.startswith("["):  # IPv6 literal
        host = host[: host.find("]") + 1]
    else:
        host = host.partition(":")[0]
    return host or None


def _split(uri: str) -> SplitResult:
    try:
        return urlsplit(uri)
    except ValueError as e:
        raise InvalidUriError(uri) from e


def uri_equals(uri1: str, uri2: str) -> bool:
    """Compare two URIs by host, path and query.

    The host must match exactly, a trailing ``/`` on the path is ignored and
    query parameters may come in any order. The scheme and fragment are not
    compared.

    Examples:
        >>> uri_equals("https://x.com/core?foo=bar&bar=foo", "https://x.com/core?bar=foo&foo=bar")
        True
        >>> uri_equals("https://x.com", "https://x.com/")
        True

    Raises:
        InvalidUriError: If either URI cannot be split (e.g. a broken IPv6 host).
    """
    parts1 = _split(uri1)
    parts2 = _split(uri2)

    if _host(parts1.netloc) != _host(parts2.netloc):
        return False

    if parts1.path.rstrip("/") != parts2.path.rstrip("/"):
        return False

    # dict equality ignores key order at every nesting level
    return parse_uri_query(parts1.query) == parse_uri_query(parts2.query)
