"""URI engine: query strings, path normalization, resolution and encoding."""

from .encoding import (
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
from .paths import clean_path, clean_uri, ltrim_path, rtrim_path
from .query import QueryStructure, build_uri_query, merge_uri_queries, parse_uri_query
from .resolve import absolute_uri, relative_uri, uri_equals

__all__ = [
    "EncodeMethod",
    "QueryStructure",
    "absolute_uri",
    "base64_decode",
    "base64_encode",
    "build_uri_query",
    "clean_path",
    "clean_uri",
    "decode_uri",
    "encode_uri",
    "encode_uri_fragment",
    "encode_uri_path",
    "encode_uri_query",
    "encode_uri_user_info",
    "ltrim_path",
    "merge_uri_queries",
    "parse_uri_query",
    "relative_uri",
    "rtrim_path",
    "uri_equals",
]
