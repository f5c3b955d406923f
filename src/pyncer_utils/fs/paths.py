"""Filesystem path and filename sanitization.

Every helper here is a pure string transformation: nothing touches the
disk. Paths are split on the platform separator, and ``/`` is accepted as a
separator on every platform.

Sanitizing rules come from a `FileSystemConfig` (the module-level
`DEFAULT_CONFIG` unless one is passed):

- In a *path*, non-printable characters are removed and forbidden characters
  are replaced with ``_``. A segment that ends up empty, or that matches a
  reserved path name, becomes ``_``.
- In a *filename*, non-printable and forbidden characters are removed, and a
  reserved name (extension excluded) becomes ``_``.

Cleaned paths always start with the separator and never end with one; the
only exception is the empty string, which stands for "no path at all".
"""

from __future__ import annotations

import os
import re
from decimal import ROUND_HALF_UP, Decimal

from pyncer_utils.config import DEFAULT_CONFIG, FileSystemConfig
from pyncer_utils.errors import InvalidArgumentError, InvalidDirectoryError
from pyncer_utils.support.structures import unset_empty

_DRIVE = re.compile(r"[a-zA-Z]:")
_ALLOW_DRIVES = os.name == "nt"

_DECIMAL_UNITS = (" Bytes", " KB", " MB", " GB", " TB", " PB", " EB", " ZB", " YB")
_BINARY_UNITS = (
    " Bytes", " KiB", " MiB", " GiB", " TiB", " PiB", " EiB", " ZiB", " YiB"
)


# ============================================================================
#                               Helpers
# ============================================================================


def _normalize_separators(path: str) -> str:
    if os.sep != "/":
        return path.replace("/", os.sep)
    return path


def _segments(path: str) -> list[str]:
    return unset_empty(_normalize_separators(path).split(os.sep))


def _join_segments(segments: list[str]) -> str:
    return os.sep + os.sep.join(segments) if segments else ""


def _remove_non_printable(value: str) -> str:
    return "".join(char for char in value if char.isprintable())


def _replace_characters(value: str, characters: str, replacement: str) -> str:
    return "".join(replacement if char in characters else char for char in value)


# ============================================================================
#                               Cleaning
# ============================================================================


def clean_path(path: str, config: FileSystemConfig = DEFAULT_CONFIG) -> str:
    """Sanitize every segment of ``path``.

    Args:
        path: The path to clean. Relative and absolute paths are treated the
            same way; the result is always rooted.
        config: Tables of forbidden characters and reserved names.

    Returns:
        The cleaned path, or ``""`` if ``path`` has no segments.

    Example:
        >>> clean_path("/a//b/$Extend/?<c/")
        '/a/b/_/__c'
    """
    cleaned: list[str] = []
    for segment in _segments(path):
        segment = _remove_non_printable(segment)
        segment = _replace_characters(segment, config.bad_path_characters, "_")

        if segment == "" or config.is_bad_path(segment):
            segment = "_"

        cleaned.append(segment)

    return _join_segments(cleaned)


def clean_dir(directory: str, config: FileSystemConfig = DEFAULT_CONFIG) -> str:
    """Sanitize an absolute directory (or file) path.

    Like `clean_path`, but the leading root is kept: the separator, or on
    Windows a drive prefix such as ``C:``. The filesystem root itself cleans
    to the separator.

    Raises:
        InvalidDirectoryError: If ``directory`` is empty or relative. A drive
            prefix counts as relative outside Windows.
    """
    head, _, tail = _normalize_separators(directory).partition(os.sep)

    is_drive = _ALLOW_DRIVES and _DRIVE.fullmatch(head) is not None
    if directory == "" or (head != "" and not is_drive):
        raise InvalidDirectoryError(directory)

    cleaned = clean_path(tail, config)
    if head == "":
        return cleaned or os.sep

    return head + os.sep + cleaned.lstrip(os.sep)


def clean_filename(name: str, config: FileSystemConfig = DEFAULT_CONFIG) -> str:
    """Sanitize a bare filename.

    Forbidden characters are removed outright. If the part before the last
    ``.`` is a reserved name it is replaced with ``_``. Trailing dots are
    stripped and an empty result becomes ``_``.

    Examples:
        >>> clean_filename("$Reparse")
        '_'
        >>> clean_filename("con.txt")
        '_.txt'
    """
    cleaned = _remove_non_printable(name)
    cleaned = _replace_characters(cleaned, config.bad_filename_characters, "")

    stem, dot, suffix = cleaned.rpartition(".")
    if not dot:
        stem, suffix = cleaned, ""

    if config.is_bad_filename(stem):
        stem = "_"

    return f"{stem}.{suffix}".rstrip(".") or "_"


def is_valid_path(path: str, config: FileSystemConfig = DEFAULT_CONFIG) -> bool:
    """Return True if ``path`` is unchanged by `clean_path`.

    Duplicate and trailing separators are collapsed before the comparison, so
    ``/a//b/`` is valid as long as ``a`` and ``b`` are.
    """
    normalized = _join_segments(_segments(path))
    return normalized == clean_path(normalized, config)


def join_paths(*paths: str, config: FileSystemConfig = DEFAULT_CONFIG) -> str:
    """Clean each of ``paths``, concatenate them and resolve ``..`` lexically.

    A ``..`` removes the segment before it. It is kept when there is nothing
    to remove, or when the segment before it is itself a ``..``. The
    filesystem is never consulted.

    Example:
        >>> join_paths("/a", "b/", "../c")
        '/a/c'
    """
    joined = "".join(clean_path(path, config) for path in paths)

    resolved: list[str] = []
    for segment in _segments(joined):
        if segment == ".." and resolved and resolved[-1] != "..":
            resolved.pop()
            continue
        resolved.append(segment)

    return _join_segments(resolved)


# ============================================================================
#                           Names and extensions
# ============================================================================


def _split_extension(path: str) -> str | None:
    _, dot, suffix = path.rpartition(".")
    if not dot:
        return None

    # a separator after the last dot means the dot belongs to a directory
    if os.sep in _normalize_separators(suffix):
        return None

    return suffix or None


def filename(path: str, remove_extension: bool = False) -> str | None:
    """Return the last segment of ``path``, or None if it is empty.

    Args:
        path: A file path or bare name.
        remove_extension: Drop the extension (and its dot) from the result.
    """
    _, _, name = _normalize_separators(path).rpartition(os.sep)

    if remove_extension and (current := _split_extension(name)) is not None:
        name = name[: -(len(current) + 1)]

    return name or None


def extension(path: str) -> str | None:
    """Return the extension of ``path`` without its dot, or None."""
    return _split_extension(path)


def replace_extension(  # pylint: disable=redefined-outer-name
    path: str, extension: str | None = None
) -> str:
    """Swap the extension of ``path`` for ``extension``.

    Passing None removes the current extension. A leading dot on
    ``extension`` is optional.
    """
    if (current := _split_extension(path)) is not None:
        path = path[: -(len(current) + 1)]

    if extension is not None:
        path += "." + extension.lstrip(".")

    return path


# ============================================================================
#                               File sizes
# ============================================================================


def filesize_from_string(data: str | bytes) -> int:
    """Return the size in bytes of ``data`` (strings are measured as UTF-8)."""
    if isinstance(data, str):
        return len(data.encode("utf-8"))
    return len(data)


def format_filesize(
    size: int, precision: int = 0, binary: bool = False, unit_offset: int = 0
) -> str:
    """Format a byte count for humans.

    Args:
        size: Number of bytes. Negative sizes format as zero.
        precision: Decimal places to round to (half up).
        binary: Use powers of 1024 and IEC units (KiB) instead of powers of
            1000 and SI units (KB).
        unit_offset: Shift the unit label, for sizes that are not counted in
            bytes (``1`` for a size already in kilobytes).

    Returns:
        The size with its unit, e.g. ``"1.5 KiB"``.

    Raises:
        InvalidArgumentError: If ``unit_offset`` is outside the unit table.

    Examples:
        >>> format_filesize(1500)
        '2 KB'
        >>> format_filesize(1536, precision=1, binary=True)
        '1.5 KiB'
    """
    units = _BINARY_UNITS if binary else _DECIMAL_UNITS
    multiplier = 1024 if binary else 1000

    if not 0 <= unit_offset < len(units):
        raise InvalidArgumentError(f"Unit offset out of range: {unit_offset}")

    if size < multiplier:
        return f"{max(0, size)}{units[unit_offset]}"

    index = 0
    value = Decimal(size)
    while value >= multiplier and index + unit_offset < len(units) - 1:
        value /= multiplier
        index += 1

    rounded = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    # normalize() drops trailing zeros, "f" keeps it out of exponent notation
    return f"{rounded.normalize():f}{units[index + unit_offset]}"
