"""Log wiring for the filesystem engine.

The engine never installs handlers. Every record it emits on the
``pyncer_utils.fs`` logger tree carries an ``operation`` attribute naming
the `Operation` that produced it (``copy``, ``delete``, ...). The helpers
here turn that into something an application can watch:

- `OperationFilter` tags records with a short ``[operation]`` prefix and can
  restrict output to a chosen set of operations.
- `config_console_handler` builds a Rich console handler using that prefix.
- `config_flight_recorder` buffers engine records in memory and writes them
  to a file only once something goes wrong.
- `watch_filesystem` attaches any handler to the engine loggers for the
  duration of a ``with`` block.

Example:
    ```py
    with watch_filesystem(config_flight_recorder(Path("tree.log"))):
        fs.move("/data/incoming", "/data/archive")
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

# pylint: disable=too-few-public-methods

FS_LOGGER = "pyncer_utils.fs"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class Operation(Enum):
    """Engine operations that emit log records."""

    MAKE_DIR = "make_dir"
    COPY = "copy"
    RENAME = "rename"
    DELETE = "delete"
    WRITE = "write"
    CHMOD = "chmod"


class OperationFilter(logging.Filter):
    """Prefix engine records with their operation, optionally dropping others.

    Records carrying an ``operation`` attribute get ``record.prefix`` set to
    ``"[copy]"`` and so on. Any other record gets an empty prefix.

    Args:
        operations: When given, only engine records for these operations
            pass. Records without an operation always pass.
    """

    def __init__(self, operations: Iterable[Operation] | None = None) -> None:
        super().__init__()
        self.operations = (
            None if operations is None else {op.value for op in operations}
        )

    def filter(self, record: logging.LogRecord) -> bool:
        operation = getattr(record, "operation", None)
        record.prefix = f"[{operation}]" if operation else ""

        if operation is None or self.operations is None:
            return True
        return operation in self.operations


def config_console_handler(
    level: int = logging.INFO,
    debug_mode: bool = False,
    color: bool = True,
    operations: Iterable[Operation] | None = None,
) -> RichHandler:
    """Build a stderr Rich handler for engine output.

    Args:
        level: Minimum level shown. Debug mode lowers it to DEBUG.
        debug_mode: Show timestamps, logger names and source locations.
        color: Let Rich pick a color system; False disables color.
        operations: Restrict output to these operations (see `OperationFilter`).

    Returns:
        The handler, ready to pass to `watch_filesystem`.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(prefix)s %(message)s")
        )
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))

    handler.addFilter(OperationFilter(operations))
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build an in-memory recorder that writes engine records to ``path`` on demand.

    Up to ``capacity`` records are kept in memory. They are written out when
    a record at ``flush_level`` or above arrives, or when the handler is
    closed with ``flush_on_close`` set. A long recursive copy therefore
    leaves a full DEBUG trail only when one of its steps failed.

    Returns:
        A `MemoryHandler` whose target is a UTF-8 `FileHandler` on ``path``.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s %(prefix)s %(message)s"
        )
    )

    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=target,
        flushOnClose=flush_on_close,
    )
    recorder.addFilter(OperationFilter())
    return recorder


@contextmanager
def watch_filesystem(
    handler: logging.Handler, level: int = logging.DEBUG
) -> Iterator[logging.Logger]:
    """Attach ``handler`` to the engine loggers inside a ``with`` block.

    The ``pyncer_utils.fs`` logger is lowered to ``level`` for the duration
    and restored afterwards. On exit the handler is detached and closed, and
    so is its target when it is a `MemoryHandler`.

    Yields:
        The ``pyncer_utils.fs`` logger.
    """
    logger = logging.getLogger(FS_LOGGER)
    previous = logger.level
    # MemoryHandler.close() drops its target, so keep a reference
    target = handler.target if isinstance(handler, MemoryHandler) else None
    logger.setLevel(level)
    logger.addHandler(handler)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
        handler.close()
        if target is not None:
            target.close()
