"""URI path normalization.

These helpers are pure string transformations and never touch the
filesystem; for filesystem paths see `pyncer_utils.fs.paths`.
"""

from __future__ import annotations

from pyncer_utils.errors import InvalidUriError
from pyncer_utils.support.strings import ltrim_string, rtrim_string

SCHEME_SEPARATOR = "://"


def clean_path(path: str) -> str:
    """Normalize the slashes of a URI path.

    Backslashes become ``/``, a leading ``/`` is added unless the path
    already has one or carries a scheme, and trailing slashes are stripped.

    Examples:
        >>> clean_path("test\\\\test/")
        '/test/test'
        >>> clean_path("https://example.com/test/")
        'https://example.com/test'
    """
    if path == "":
        return ""

    path = path.replace("\\", "/")

    scheme, separator, rest = path.partition(SCHEME_SEPARATOR)
    if separator:
        # never eat into the scheme separator itself
        return scheme + separator + rest.rstrip("/")

    if not path.startswith("/"):
        path = "/" + path

    return path.rstrip("/")


def clean_uri(uri: str) -> str:
    """Normalize an absolute URI's path while leaving its query untouched.

    A host-only URI followed by a query gains a ``/`` before the ``?`` so
    that ``scheme://host?q`` becomes ``scheme://host/?q``.

    Args:
        uri: An absolute URI.

    Returns:
        The cleaned URI.

    Raises:
        InvalidUriError: If ``uri`` has no scheme separator.
    """
    if SCHEME_SEPARATOR not in uri:
        raise InvalidUriError(uri)

    path, separator, query = uri.partition("?")
    path = clean_path(path)

    if separator and path.count("/") == 2:  # only the "//" of the scheme
        path += "/"

    return path + separator + query


def _prepare_trim(path: str, trim: str) -> tuple[str, str] | None:
    trim = trim.strip("/")
    if trim == "":
        return None
    return "/" + path.strip("/") + "/", "/" + trim + "/"


def ltrim_path(path: str, trim: str) -> str:
    """Remove the leading segments ``trim`` from ``path`` (once).

    Matching happens on whole ``/``-delimited segments. The result always
    starts with ``/`` and never ends with one, except for the bare root:

        >>> ltrim_path("/a/test/test/", "a/test")
        '/test'
    """
    prepared = _prepare_trim(path, trim)
    if prepared is None:
        return "/" + path.strip("/")

    padded_path, padded_trim = prepared
    return "/" + ltrim_string(padded_path, padded_trim, once=True).strip("/")


def rtrim_path(path: str, trim: str) -> str:
    """Remove the trailing segments ``trim`` from ``path`` (once).

        >>> rtrim_path("/a/test/test/", "test")
        '/a/test'
    """
    prepared = _prepare_trim(path, trim)
    if prepared is None:
        return "/" + path.strip("/")

    padded_path, padded_trim = prepared
    return "/" + rtrim_string(padded_path, padded_trim, once=True).strip("/")
