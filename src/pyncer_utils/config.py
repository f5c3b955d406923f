"""Configuration for the filesystem engine.

This module centralizes the named constants consumed by the path sanitizers
and the tree engine: default file and directory modes, the characters that
may not appear in a path segment or filename, and the reserved names that
common operating systems refuse (device names, NTFS metadata files).

A `FileSystemConfig` is an immutable value. Build one per process (for
example with `load_config_from_env`) and hand it to `FileSystem`; tests can
construct alternate tables without touching process state.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass

from pyncer_utils.errors import InvalidConfigError

ROOT_DIR_ENV = "PYNCER_ROOT_DIR"  # pragma: no mutate
FILE_MODE_ENV = "PYNCER_FILE_MODE"  # pragma: no mutate
DIR_MODE_ENV = "PYNCER_DIR_MODE"  # pragma: no mutate

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755

BAD_PATH_CHARACTERS = '/\\?*:|"<>'
BAD_PATHS: tuple[str, ...] = ("$Extend",)
BAD_FILENAME_CHARACTERS = '/\\?*:|"<>'
BAD_FILENAMES: tuple[str, ...] = (
    # Windows device names
    "CON",
    "PRN",
    "AUX",
    "CLOCK$",
    "NUL",
    *(f"COM{i}" for i in range(10)),
    *(f"LPT{i}" for i in range(10)),
    # NTFS metadata files
    "$Mft",
    "$MftMirr",
    "$LogFile",
    "$Volume",
    "$AttrDef",
    "$Bitmap",
    "$Boot",
    "$BadClus",
    "$Secure",
    "$Upcase",
    "$Extend",
    "$Quota",
    "$ObjId",
    "$Reparse",
)


@dataclass(frozen=True)
class FileSystemConfig:
    """Value object holding the filesystem engine's constants.

    Attributes:
        root_dir: Optional directory under which `make_dir` starts creating
            directories instead of probing every ancestor from the root.
        file_mode: Mode applied to files written by the engine, or None to
            leave the mode untouched.
        dir_mode: Mode applied to directories created by the engine, or None.
        bad_path_characters: Characters replaced by ``_`` in path segments.
        bad_paths: Reserved path segment names (case-insensitive).
        bad_filename_characters: Characters removed from filenames.
        bad_filenames: Reserved filenames (case-insensitive, extension excluded).
    """

    root_dir: str | None = None
    file_mode: int | None = DEFAULT_FILE_MODE
    dir_mode: int | None = DEFAULT_DIR_MODE
    bad_path_characters: str = BAD_PATH_CHARACTERS
    bad_paths: tuple[str, ...] = BAD_PATHS
    bad_filename_characters: str = BAD_FILENAME_CHARACTERS
    bad_filenames: tuple[str, ...] = BAD_FILENAMES

    def replace(self, **changes: object) -> FileSystemConfig:
        """Return a copy of this config with the given fields replaced."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    def is_bad_path(self, segment: str) -> bool:
        """Return True if ``segment`` case-insensitively matches a reserved path name."""
        folded = segment.casefold()
        return any(folded == bad.casefold() for bad in self.bad_paths)

    def is_bad_filename(self, name: str) -> bool:
        """Return True if ``name`` case-insensitively matches a reserved filename."""
        folded = name.casefold()
        return any(folded == bad.casefold() for bad in self.bad_filenames)


DEFAULT_CONFIG = FileSystemConfig()


def _parse_mode(name: str, value: str) -> int:
    """Parse an octal mode string such as ``0644``, ``644`` or ``0o644``."""
    try:
        mode = int(value.strip().lower().removeprefix("0o"), 8)
    except ValueError as e:
        raise InvalidConfigError(name, value) from e
    if not 0 <= mode <= 0o7777:
        raise InvalidConfigError(name, value)
    return mode


def load_config_from_env(environ: Mapping[str, str] | None = None) -> FileSystemConfig:
    """Build a `FileSystemConfig` from environment variables.

    Reads:
    - `PYNCER_ROOT_DIR` → `root_dir`
    - `PYNCER_FILE_MODE` → `file_mode` (octal)
    - `PYNCER_DIR_MODE` → `dir_mode` (octal)

    Unset or empty variables keep the defaults.

    Args:
        environ: Mapping to read from. Defaults to `os.environ`; override in
            tests to avoid touching the real environment.

    Returns:
        The resulting configuration.

    Raises:
        InvalidConfigError: If a mode variable is not a valid octal mode.
    """
    if environ is None:
        environ = os.environ

    changes: dict[str, object] = {}
    if root_dir := environ.get(ROOT_DIR_ENV):
        changes["root_dir"] = root_dir
    if file_mode := environ.get(FILE_MODE_ENV):
        changes["file_mode"] = _parse_mode(FILE_MODE_ENV, file_mode)
    if dir_mode := environ.get(DIR_MODE_ENV):
        changes["dir_mode"] = _parse_mode(DIR_MODE_ENV, dir_mode)

    return DEFAULT_CONFIG.replace(**changes)
