"""Filesystem tree engine.

`FileSystem` bundles the operations that act on the live filesystem:
creating directories, recursive copy/move/rename/delete, directory
listings, and small file and permission helpers. Each instance holds the
`FileSystemConfig` it was built with, so no operation reads process-wide
state.

Conventions shared by every public method:

- Path arguments are absolute; they are run through `clean_dir` first, so a
  relative path raises `InvalidDirectoryError` and unsafe segments are
  sanitized before anything touches the disk.
- Directory listings are re-read on every call and sorted by name.
- Symbolic links are never traversed: a link is copied, moved or deleted as
  a single entry.
- OS failures surface as `OperationError` subclasses chained to the original
  `OSError`. A failed recursive copy or move is not rolled back.
- Each log record carries an ``operation`` attribute naming the
  `Operation` that emitted it; see `pyncer_utils.logging`.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Iterable

from pyncer_utils.config import DEFAULT_CONFIG, FileSystemConfig
from pyncer_utils.errors import (
    DestinationExistsError,
    DestinationKindError,
    InvalidArgumentError,
    InvalidDirectoryError,
    OperationError,
    PathNotFoundError,
)
from pyncer_utils.fs.models import DirInfo, EntryKind, FileInfo, entry_kind, is_real_dir
from pyncer_utils.fs.modes import UNSET, ModeArg, resolve_mode
from pyncer_utils.fs.paths import clean_dir, extension, filename
from pyncer_utils.logging import Operation
from pyncer_utils.support.structures import ensure_list

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


class FileSystem:
    """Tree engine bound to one `FileSystemConfig`."""

    def __init__(self, config: FileSystemConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._root_dir = (
            clean_dir(self._config.root_dir, self._config)
            if self._config.root_dir
            else None
        )

    @property
    def config(self) -> FileSystemConfig:
        """The configuration this engine was built with."""
        return self._config

    # --- Directories ---

    def make_dir(self, directory: PathLike, mode: ModeArg = UNSET) -> None:
        """Create ``directory`` and any missing ancestors.

        Existing directories are left alone, so calling this on a directory
        that already exists is a no-op. When the configured ``root_dir``
        exists and contains ``directory``, ancestors above it are not probed.

        Args:
            directory: The directory to create.
            mode: Mode for each newly created directory. Defaults to the
                configured ``dir_mode``; None skips the ``chmod``.

        Raises:
            InvalidDirectoryError: If ``directory`` is not absolute.
            OperationError: If a directory could not be created (for example
                because a file is in the way).
        """
        resolved = resolve_mode(mode, self._config.dir_mode)
        self._make_dir(self._clean(directory), resolved)

    def _make_dir(self, target: str, mode: int | None) -> None:
        root = self._root_dir
        if root is not None and _is_within(target, root) and os.path.isdir(root):
            current = root.rstrip(os.sep)
            remainder = target[len(current) :]
        else:
            current, _, remainder = target.partition(os.sep)

        for segment in remainder.split(os.sep):
            if segment == "":
                continue

            current = current + os.sep + segment
            if os.path.isdir(current):
                continue

            try:
                os.mkdir(current)
            except OSError as e:
                raise OperationError(
                    f"Directory could not be made. ({current})", current
                ) from e

            logger.debug("Created directory %s", current, extra=_op(Operation.MAKE_DIR))
            if mode is not None:
                self._apply_mode(current, mode)

    # --- Tree operations ---

    def copy(
        self, source: PathLike, destination: PathLike, overwrite: bool = False
    ) -> None:
        """Copy a file or a directory tree.

        A directory is merged into ``destination`` (created if missing),
        child by child. A file is copied byte for byte, creating the parent
        of ``destination`` if needed. Links to files are followed.

        Args:
            source: The file or directory to copy.
            destination: Where to copy it.
            overwrite: Replace existing destination files instead of failing.

        Raises:
            PathNotFoundError: If ``source`` does not exist.
            DestinationExistsError: If a destination file exists and
                ``overwrite`` is False.
            DestinationKindError: If a destination exists with the wrong kind.
            InvalidArgumentError: If a directory would be copied into itself.
            OperationError: On any other OS failure.
        """
        source_path, destination_path = self._clean(source), self._clean(destination)
        self._guard_nesting(source_path, destination_path)
        self._copy(source_path, destination_path, overwrite)

    def _copy(self, source: str, destination: str, overwrite: bool) -> None:
        if not os.path.exists(source):
            raise PathNotFoundError(source)

        if is_real_dir(source):
            self._ensure_dir(destination)
            for name in self._list(source):
                child = os.path.join(source, name)
                if entry_kind(child) is not None:
                    self._copy(child, os.path.join(destination, name), overwrite)
            return

        if is_real_dir(destination):
            raise DestinationKindError(destination, "file")

        self._ensure_parent(destination)

        if not overwrite and os.path.lexists(destination):
            raise DestinationExistsError(destination)

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise OperationError(
                f"Source could not be copied. ({source})", source
            ) from e

        logger.debug("Copied %s to %s", source, destination, extra=_op(Operation.COPY))

    def move(
        self, source: PathLike, destination: PathLike, overwrite: bool = False
    ) -> None:
        """Move a file or a directory tree.

        A directory is merged into ``destination`` child by child and then
        removed, but only if it ended up empty. A file (or link) is handed to
        `rename`.

        Raises:
            PathNotFoundError: If ``source`` does not exist.
            DestinationExistsError: If a destination entry exists and
                ``overwrite`` is False.
            DestinationKindError: If a destination exists with the wrong kind.
            InvalidArgumentError: If a directory would be moved into itself, or
                ``destination`` is ``source`` or one of its ancestors.
            OperationError: On any other OS failure.
        """
        source_path, destination_path = self._clean(source), self._clean(destination)
        self._guard_overlap(source_path, destination_path)
        self._move(source_path, destination_path, overwrite)

    def _move(self, source: str, destination: str, overwrite: bool) -> None:
        if not os.path.lexists(source):
            raise PathNotFoundError(source)

        if not is_real_dir(source):
            self._rename(source, destination, overwrite)
            return

        self._ensure_dir(destination)
        for name in self._list(source):
            self._move(
                os.path.join(source, name), os.path.join(destination, name), overwrite
            )

        if not self._list(source):
            self._remove_dir(source)

    def rename(
        self, source: PathLike, destination: PathLike, overwrite: bool = False
    ) -> None:
        """Rename ``source`` to ``destination`` in a single OS call.

        With ``overwrite``, an existing destination of the same kind (file
        for a file, directory for a directory) is deleted first.

        Raises:
            PathNotFoundError: If ``source`` does not exist.
            DestinationExistsError: If ``destination`` exists and ``overwrite``
                is False.
            DestinationKindError: If ``destination`` exists with the other kind.
            InvalidArgumentError: If ``destination`` is ``source``, one of its
                ancestors, or lies inside a ``source`` directory.
            OperationError: If the OS refuses the rename.
        """
        source_path, destination_path = self._clean(source), self._clean(destination)
        self._guard_overlap(source_path, destination_path)
        self._rename(source_path, destination_path, overwrite)

    def _rename(self, source: str, destination: str, overwrite: bool) -> None:
        if not os.path.lexists(source):
            raise PathNotFoundError(source)

        if os.path.lexists(destination):
            if not overwrite:
                raise DestinationExistsError(destination)

            # only overwrite entries of the same kind
            if is_real_dir(source):
                if not os.path.isdir(destination):
                    raise DestinationKindError(destination, "directory")
            elif is_real_dir(destination):
                raise DestinationKindError(destination, "file")

            self._delete(destination)
        else:
            self._make_dir(os.path.dirname(destination), self._config.dir_mode)

        try:
            os.rename(source, destination)
        except OSError as e:
            raise OperationError(
                f"Source could not be renamed. ({source})", source
            ) from e

        logger.debug(
            "Renamed %s to %s", source, destination, extra=_op(Operation.RENAME)
        )

    def delete(self, path: PathLike) -> None:
        """Delete a file, a link, or a directory and everything below it.

        Raises:
            PathNotFoundError: If nothing exists at ``path``.
            OperationError: If an entry could not be removed.
        """
        self._delete(self._clean(path))

    def _delete(self, path: str) -> None:
        if not os.path.lexists(path):
            raise PathNotFoundError(path, "File")

        if not is_real_dir(path):
            try:
                os.unlink(path)
            except OSError as e:
                raise OperationError(
                    f"File could not be deleted. ({path})", path
                ) from e

            logger.debug("Deleted %s", path, extra=_op(Operation.DELETE))
            return

        for name in self._list(path):
            self._delete(os.path.join(path, name))

        self._remove_dir(path)

    def delete_contents(self, directory: PathLike) -> None:
        """Delete everything inside ``directory`` but keep ``directory`` itself.

        Does nothing if ``directory`` is not a directory.
        """
        target = self._clean(directory)
        if not os.path.isdir(target):
            return

        for name in self._list(target):
            self._delete(os.path.join(target, name))

    def delete_matching(self, delete_dir: PathLike, match_dir: PathLike) -> None:
        """Delete the children of ``delete_dir`` whose names appear in ``match_dir``.

        Only direct children are compared; a matching directory is deleted
        as a whole.

        Example:
            With ``Delete/{Dir1, Dir2, file1.txt, file2.txt}`` and
            ``Match/{Dir1, file1.txt}``, ``delete_matching(Delete, Match)``
            leaves ``Delete/{Dir2, file2.txt}``.

        Raises:
            PathNotFoundError: If either directory does not exist.
            InvalidDirectoryError: If either path is not a real directory.
        """
        roots = (
            (self._clean(delete_dir), "Delete directory"),
            (self._clean(match_dir), "Match directory"),
        )
        for root, role in roots:
            if not os.path.lexists(root):
                raise PathNotFoundError(root, role)
        for root, role in roots:
            if not is_real_dir(root):
                raise InvalidDirectoryError(root, f"{role.lower()} is not a directory")

        delete_root, match_root = roots[0][0], roots[1][0]
        for name in self._list(match_root):
            target = os.path.join(delete_root, name)
            if os.path.lexists(target):
                self._delete(target)

    # --- Listings ---

    def files(
        self, directory: PathLike, extensions: str | Iterable[str] | None = None
    ) -> list[FileInfo]:
        """List the files directly inside ``directory``, sorted by name.

        Args:
            directory: The directory to list.
            extensions: One extension or several (case-insensitive, leading
                dot optional). When given, files without a matching extension
                are left out.

        Raises:
            InvalidDirectoryError: If ``directory`` is not a directory.
            OperationError: If ``directory`` could not be read.
        """
        target = self._require_dir(directory)
        wanted = [
            value.lstrip(".").lower()
            for value in ensure_list(extensions, empty=(None, ""))
        ]

        found: list[FileInfo] = []
        for name in self._list(target):
            if os.path.isdir(os.path.join(target, name)):
                continue

            suffix = extension(name)
            if wanted and (suffix is None or suffix.lower() not in wanted):
                continue

            found.append(
                FileInfo(
                    dirname=target,
                    basename=name,
                    filename=filename(name, remove_extension=True) or "",
                    extension=suffix,
                )
            )
        return found

    def filenames(
        self,
        directory: PathLike,
        extensions: str | Iterable[str] | None = None,
        remove_extension: bool = False,
    ) -> list[str]:
        """Like `files`, but return names only."""
        if remove_extension:
            return [info.filename for info in self.files(directory, extensions)]
        return [info.basename for info in self.files(directory, extensions)]

    def dirs(self, directory: PathLike) -> list[DirInfo]:
        """List the directories directly inside ``directory``, sorted by name.

        Links to directories are included.
        """
        target = self._require_dir(directory)
        return [
            DirInfo(dirname=target, basename=name)
            for name in self._list(target)
            if os.path.isdir(os.path.join(target, name))
        ]

    def dirnames(self, directory: PathLike) -> list[str]:
        """Like `dirs`, but return names only."""
        return [info.basename for info in self.dirs(directory)]

    def is_empty(self, directory: PathLike, ignore: str | Iterable[str] = ()) -> bool:
        """Return True if ``directory`` has no entries besides those in ``ignore``."""
        target = self._require_dir(directory)
        ignored = set(ensure_list(ignore))
        return all(name in ignored for name in self._list(target))

    # --- Files ---

    def write_file(
        self,
        file: PathLike,
        data: str | bytes,
        append: bool = False,
        mode: ModeArg = UNSET,
    ) -> int:
        """Write ``data`` to ``file``, creating its directory if needed.

        Args:
            file: The file to write.
            data: Bytes, or text to encode as UTF-8.
            append: Append instead of truncating.
            mode: Mode applied after writing. Defaults to the configured
                ``file_mode``; None skips the ``chmod``.

        Returns:
            The number of bytes written.

        Raises:
            OperationError: If the file could not be written.
        """
        path = self._clean(file)
        self._ensure_parent(path)

        payload = data.encode("utf-8") if isinstance(data, str) else data
        try:
            with open(path, "ab" if append else "wb") as handle:
                written = handle.write(payload)
        except OSError as e:
            raise OperationError(f"File is not writable. ({path})", path) from e

        if (resolved := resolve_mode(mode, self._config.file_mode)) is not None:
            self._apply_mode(path, resolved)

        logger.debug("Wrote %d bytes to %s", written, path, extra=_op(Operation.WRITE))
        return written

    def read_file(self, file: PathLike, length: int = 0, offset: int = 0) -> bytes:
        """Read ``length`` bytes of ``file`` starting at ``offset``.

        A ``length`` of zero reads to the end of the file.

        Raises:
            InvalidArgumentError: If ``length`` or ``offset`` is negative.
            PathNotFoundError: If ``file`` is not an existing file.
            OperationError: If the file could not be read.
        """
        if length < 0:
            raise InvalidArgumentError("Length must be greater than or equal to zero.")
        if offset < 0:
            raise InvalidArgumentError("Offset must be greater than or equal to zero.")

        path = self._clean(file)
        if not os.path.isfile(path):
            raise PathNotFoundError(path, "File")

        try:
            with open(path, "rb") as handle:
                handle.seek(offset)
                return handle.read(length or -1)
        except OSError as e:
            raise OperationError(f"File is not readable. ({path})", path) from e

    # --- Permissions ---

    def chmod(
        self, path: PathLike, file_mode: ModeArg = UNSET, dir_mode: ModeArg = UNSET
    ) -> None:
        """Recursively apply ``file_mode`` to files and ``dir_mode`` to directories.

        Symbolic links below ``path`` are skipped. A None mode leaves that
        kind of entry untouched.

        Raises:
            PathNotFoundError: If nothing exists at ``path``.
            OperationError: If ``path`` is a symbolic link or a mode could not
                be changed.
        """
        target = self._clean(path)
        if os.path.islink(target):
            raise OperationError(
                f"Symbolic link could not have its mode changed. ({target})", target
            )
        if not os.path.exists(target):
            raise PathNotFoundError(target)

        self._chmod(
            target,
            resolve_mode(file_mode, self._config.file_mode),
            resolve_mode(dir_mode, self._config.dir_mode),
        )

    def _chmod(self, path: str, file_mode: int | None, dir_mode: int | None) -> None:
        if os.path.isdir(path):
            for name in self._list(path):
                child = os.path.join(path, name)
                if not os.path.islink(child):
                    self._chmod(child, file_mode, dir_mode)
            mode = dir_mode
        else:
            mode = file_mode

        if mode is None:
            return

        try:
            os.chmod(path, mode)
        except OSError as e:
            raise OperationError(
                f"File could not have its mode changed. ({path})", path
            ) from e

        logger.debug("Changed mode of %s to %o", path, mode, extra=_op(Operation.CHMOD))

    def can_chmod(self, path: PathLike) -> bool:
        """Return True if the mode of ``path`` can be changed by this process.

        The check flips one permission bit and restores it.
        """
        target = self._clean(path)
        try:
            current = stat.S_IMODE(os.stat(target).st_mode)
            os.chmod(target, current ^ stat.S_IXOTH)
            os.chmod(target, current)
        except OSError:
            return False
        return True

    def is_writable(self, path: PathLike) -> bool:
        """Return True if ``path`` can be written to.

        For a directory this means a file can be created inside it.

        A missing file is probed by creating it and removing it again.
        """
        target = self._clean(path)

        if os.path.isdir(target):
            try:
                with tempfile.TemporaryFile(dir=target):
                    pass
            except OSError:
                return False
            return True

        existed = os.path.lexists(target)
        try:
            with open(target, "ab"):
                pass
        except OSError:
            return False

        if not existed:
            os.unlink(target)
        return True

    def entry_kind(self, path: PathLike) -> EntryKind | None:
        """Return the kind of the entry at ``path`` (links are not followed)."""
        return entry_kind(self._clean(path))

    # --- Internal Helpers ---

    def _clean(self, path: PathLike) -> str:
        return clean_dir(os.fspath(path), self._config)

    def _require_dir(self, directory: PathLike) -> str:
        target = self._clean(directory)
        if not os.path.isdir(target):
            raise InvalidDirectoryError(target)
        return target

    def _ensure_dir(self, path: str) -> None:
        if not os.path.lexists(path):
            self._make_dir(path, self._config.dir_mode)
        elif not os.path.isdir(path):
            raise DestinationKindError(path, "directory")

    def _ensure_parent(self, path: str) -> None:
        parent = os.path.dirname(path)
        if not os.path.isdir(parent):
            self._make_dir(parent, self._config.dir_mode)

    @staticmethod
    def _guard_nesting(source: str, destination: str) -> None:
        if is_real_dir(source) and _is_within(destination, source):
            raise InvalidArgumentError(
                f"Cannot place a directory inside itself. ({destination})"
            )

    @staticmethod
    def _guard_overlap(source: str, destination: str) -> None:
        # replacing the destination would delete the source first
        if _is_within(source, destination):
            raise InvalidArgumentError(
                f"Cannot replace an entry with itself or its parent. ({destination})"
            )
        FileSystem._guard_nesting(source, destination)

    @staticmethod
    def _list(path: str) -> list[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            raise OperationError(
                f"Directory could not be opened. ({path})", path
            ) from e

    @staticmethod
    def _remove_dir(path: str) -> None:
        try:
            os.rmdir(path)
        except OSError as e:
            raise OperationError(
                f"Directory could not be deleted. ({path})", path
            ) from e
        logger.debug("Deleted directory %s", path, extra=_op(Operation.DELETE))

    @staticmethod
    def _apply_mode(path: str, mode: int) -> None:
        try:
            os.chmod(path, mode)
        except OSError as e:
            logger.warning(
                "Could not change mode of %s to %o: %s",
                path,
                mode,
                e,
                extra=_op(Operation.CHMOD),
            )


def _op(operation: Operation) -> dict[str, str]:
    return {"operation": operation.value}


def _is_within(path: str, parent: str) -> bool:
    """Return True if ``path`` is ``parent`` or lies beneath it."""
    return path == parent or path.startswith(parent.rstrip(os.sep) + os.sep)
