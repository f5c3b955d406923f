"""Unit tests for percent-encoding and URL-safe base64 helpers."""

import pytest

from pyncer_utils.errors import InvalidArgumentError
from pyncer_utils.uri.encoding import (
    EncodeMethod,
    base64_decode,
    base64_encode,
    decode_uri,
    encode_uri,
    encode_uri_fragment,
    encode_uri_path,
    encode_uri_query,
    encode_uri_user_info,
)


@pytest.mark.parametrize(
    "method, expected",
    [
        (EncodeMethod.RFC3986, "this%20is%20a%20test"),
        (EncodeMethod.RFC1738, "this+is+a+test"),
    ],
)
def test_encode_uri(method: EncodeMethod, expected: str) -> None:
    """Spaces follow the selected method."""
    assert encode_uri("this is a test", method) == expected


def test_encode_uri_escapes_reserved_characters() -> None:
    """Everything outside the unreserved set is escaped, UTF-8 first."""
    assert encode_uri("a/b?c=d&é~") == "a%2Fb%3Fc%3Dd%26%C3%A9~"


@pytest.mark.parametrize(
    "value, method, expected",
    [
        ("this%20is%20a%20test", EncodeMethod.RFC3986, "this is a test"),
        ("this+is+a+test", EncodeMethod.RFC1738, "this is a test"),
        ("this+is+a+test", EncodeMethod.RFC3986, "this+is+a+test"),
        ("%C3%A9", EncodeMethod.RFC3986, "é"),
    ],
)
def test_decode_uri(value: str, method: EncodeMethod, expected: str) -> None:
    """Only RFC1738 treats ``+`` as a space."""
    assert decode_uri(value, method) == expected


def test_decode_uri_defaults_to_rfc3986() -> None:
    """The default method keeps ``+`` literal."""
    assert decode_uri("a+b%20c") == "a+b c"


# ============================================================================
#                           Component encoders
# ============================================================================


@pytest.mark.parametrize(
    "value, expected",
    [
        ("/test <wow>/#^/", "/test%20%3Cwow%3E/%23%5E/"),
        (
            "user<name>:pass!@#$%^&*()[]<>",
            "user%3Cname%3E:pass!@%23$%25%5E&*()%5B%5D%3C%3E",
        ),
        (
            "?!@#$%=^&*()[]<>&,.=bar",
            "%3F!@%23$%25=%5E&*()%5B%5D%3C%3E&,.=bar",
        ),
        ("/already%20encoded/", "/already%20encoded/"),
        ("/100%/", "/100%25/"),
    ],
)
def test_encode_uri_path(value: str, expected: str) -> None:
    """Paths keep ``/``, ``:``, ``@``, sub-delimiters and valid escapes."""
    assert encode_uri_path(value) == expected


def test_encode_uri_path_rfc1738() -> None:
    """RFC1738 turns escaped spaces into ``+``."""
    assert encode_uri_path("/a b/", EncodeMethod.RFC1738) == "/a+b/"


def test_encode_uri_user_info() -> None:
    """User info escapes ``:``, ``@`` and ``/`` too."""
    assert (
        encode_uri_user_info("user<name>:pass!@#$%^&*()[]<>")
        == "user%3Cname%3E%3Apass!%40%23$%25%5E&*()%5B%5D%3C%3E"
    )
    assert encode_uri_user_info("a/b") == "a%2Fb"


def test_encode_uri_query() -> None:
    """Queries additionally keep ``?``."""
    assert (
        encode_uri_query("?!@#$%=^&*()[]<>&,.=bar")
        == "?!@%23$%25=%5E&*()%5B%5D%3C%3E&,.=bar"
    )


def test_encode_uri_fragment() -> None:
    """Fragments share the query allow-list, so a ``#`` is escaped."""
    assert (
        encode_uri_fragment("#!@#$%=^&*()[]<>&,.=bar")
        == "%23!@%23$%25=%5E&*()%5B%5D%3C%3E&,.=bar"
    )


@pytest.mark.parametrize(
    "encoder",
    [encode_uri_path, encode_uri_user_info, encode_uri_query, encode_uri_fragment],
)
def test_component_encoders_are_idempotent(encoder) -> None:
    """Encoding an encoded component changes nothing."""
    value = "a b<c>%/?:@#"
    once = encoder(value)
    assert encoder(once) == once


# ============================================================================
#                               base64
# ============================================================================


def test_base64_encode() -> None:
    """Text is encoded as UTF-8 with no padding."""
    assert (
        base64_encode("1234567890abcdefghijklmnopqrstuvwxyz")
        == "MTIzNDU2Nzg5MGFiY2RlZmdoaWprbG1ub3BxcnN0dXZ3eHl6"
    )


def test_base64_encode_uses_url_safe_alphabet() -> None:
    """``+`` and ``/`` become ``-`` and ``_``; padding is stripped."""
    assert base64_encode(b"\xfb\xff") == "-_8"


def test_base64_decode() -> None:
    """Missing padding is restored before decoding."""
    assert (
        base64_decode("MTIzNDU2Nzg5MGFiY2RlZmdoaWprbG1ub3BxcnN0dXZ3eHl6")
        == b"1234567890abcdefghijklmnopqrstuvwxyz"
    )
    assert base64_decode(b"-_8") == b"\xfb\xff"


class TestBase64DecodeErrors:
    """Undecodable input raises InvalidArgumentError."""

    @staticmethod
    @pytest.mark.parametrize("data", ["a", "abcde", b"\xff\xfe"])
    def test_invalid_input_raises(data: str | bytes) -> None:
        """Impossible lengths and non-ASCII bytes are rejected."""
        with pytest.raises(InvalidArgumentError, match="Invalid base64 data."):
            base64_decode(data)
