"""Filesystem path sanitizers and the recursive tree engine."""

from .engine import FileSystem
from .models import DirInfo, EntryKind, FileInfo
from .modes import UNSET
from .paths import (
    clean_dir,
    clean_filename,
    clean_path,
    extension,
    filename,
    filesize_from_string,
    format_filesize,
    is_valid_path,
    join_paths,
    replace_extension,
)

__all__ = [
    "UNSET",
    "DirInfo",
    "EntryKind",
    "FileInfo",
    "FileSystem",
    "clean_dir",
    "clean_filename",
    "clean_path",
    "extension",
    "filename",
    "filesize_from_string",
    "format_filesize",
    "is_valid_path",
    "join_paths",
    "replace_extension",
]
