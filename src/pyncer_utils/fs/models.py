"""Value objects describing filesystem entries."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    """Enumeration of the entry kinds the tree engine traverses."""

    FILE = "file"
    DIRECTORY = "dir"
    LINK = "link"


def entry_kind(path: str) -> EntryKind | None:
    """Return the kind of the entry at ``path`` without following links.

    Returns None when nothing exists at ``path`` or when the entry is some
    other kind of node (FIFO, socket, device).
    """
    if os.path.islink(path):
        return EntryKind.LINK
    if os.path.isdir(path):
        return EntryKind.DIRECTORY
    if os.path.isfile(path):
        return EntryKind.FILE
    return None


def is_real_dir(path: str) -> bool:
    """Return True if ``path`` is a directory and not a link to one."""
    return os.path.isdir(path) and not os.path.islink(path)


@dataclass(frozen=True)
class FileInfo:
    """Value object describing a file found by a directory listing.

    Attributes:
        dirname: Directory containing the file.
        basename: File name including the extension.
        filename: File name without the extension.
        extension: Extension without the dot, or None.
    """

    dirname: str
    basename: str
    filename: str
    extension: str | None

    @property
    def path(self) -> str:
        """Full path of the file."""
        return os.path.join(self.dirname, self.basename)


@dataclass(frozen=True)
class DirInfo:
    """Value object describing a directory found by a directory listing."""

    dirname: str
    basename: str

    @property
    def path(self) -> str:
        """Full path of the directory."""
        return os.path.join(self.dirname, self.basename)
