"""Percent-encoding and URL-safe base64 helpers.

Each component encoder percent-encodes runs of characters that fall outside
the component's allow-list, plus any ``%`` that does not start a valid
``%XX`` escape. Existing escapes are preserved, so encoding an already
encoded component is a no-op.

Allow-lists (in addition to the RFC 3986 unreserved characters and
sub-delimiters):

- path: ``:``, ``@``, ``/``
- user info: nothing else (``:``, ``@`` and ``/`` are encoded)
- query and fragment: ``:``, ``@``, ``/``, ``?``
"""

from __future__ import annotations

import base64
import re
from enum import Enum
from urllib.parse import quote, unquote

from pyncer_utils.errors import InvalidArgumentError


class EncodeMethod(Enum):
    """Enumeration of percent-encoding flavours.

    Modes:
    - RFC3986: spaces become ``%20``.
    - RFC1738: spaces become ``+`` (form encoding).
    """

    RFC3986 = "rfc3986"
    RFC1738 = "rfc1738"


_UNRESERVED_SUB_DELIMS = r"a-zA-Z0-9_\-.~!$&'()*+,;="
_LONE_PERCENT = r"%(?![A-Fa-f0-9]{2})"

PATH_PATTERN = re.compile(rf"(?:[^{_UNRESERVED_SUB_DELIMS}%:@/]+|{_LONE_PERCENT})")
USER_INFO_PATTERN = re.compile(rf"(?:[^{_UNRESERVED_SUB_DELIMS}%]+|{_LONE_PERCENT})")
QUERY_PATTERN = re.compile(rf"(?:[^{_UNRESERVED_SUB_DELIMS}%:@/?]+|{_LONE_PERCENT})")


def encode_uri(value: str, encode_method: EncodeMethod = EncodeMethod.RFC3986) -> str:
    """Percent-encode every character outside the RFC 3986 unreserved set.

    Args:
        value: The raw string.
        encode_method: RFC3986 (space → ``%20``) or RFC1738 (space → ``+``).

    Returns:
        The encoded string.
    """
    encoded = quote(value, safe="")
    if encode_method is EncodeMethod.RFC1738:
        encoded = encoded.replace("%20", "+")
    return encoded


def decode_uri(value: str, encode_method: EncodeMethod = EncodeMethod.RFC3986) -> str:
    """Decode a percent-encoded string; RFC1738 also turns ``+`` into a space."""
    if encode_method is EncodeMethod.RFC1738:
        value = value.replace("+", " ")
    return unquote(value)


def _encode_component(
    pattern: re.Pattern[str], value: str, encode_method: EncodeMethod
) -> str:
    return pattern.sub(lambda match: encode_uri(match.group(0), encode_method), value)


def encode_uri_path(
    path: str, encode_method: EncodeMethod = EncodeMethod.RFC3986
) -> str:
    """Encode a URI path, keeping ``/``, ``:``, ``@`` and valid escapes."""
    return _encode_component(PATH_PATTERN, path, encode_method)


def encode_uri_user_info(
    value: str, encode_method: EncodeMethod = EncodeMethod.RFC3986
) -> str:
    """Encode the user-info part of a URI (``user:pass`` halves, one at a time)."""
    return _encode_component(USER_INFO_PATTERN, value, encode_method)


def encode_uri_query(
    value: str, encode_method: EncodeMethod = EncodeMethod.RFC3986
) -> str:
    """Encode a raw query string, keeping ``?``, ``/``, ``&`` and ``=``."""
    return _encode_component(QUERY_PATTERN, value, encode_method)


def encode_uri_fragment(
    value: str, encode_method: EncodeMethod = EncodeMethod.RFC3986
) -> str:
    """Encode a URI fragment; fragments share the query allow-list."""
    return encode_uri_query(value, encode_method)


def base64_encode(data: str | bytes) -> str:
    """Encode ``data`` with the URL-safe base64 alphabet and no padding.

    Strings are encoded as UTF-8 first.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64_decode(data: str | bytes) -> bytes:
    """Decode URL-safe base64, restoring any stripped padding.

    Raises:
        InvalidArgumentError: If ``data`` is not valid base64.
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("ascii")
        padded = data + "=" * (-len(data) % 4)
        return base64.urlsafe_b64decode(padded)
    except ValueError as e:  # binascii.Error and UnicodeDecodeError included
        raise InvalidArgumentError("Invalid base64 data.") from e
