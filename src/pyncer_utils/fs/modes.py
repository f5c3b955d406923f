"""Tri-state handling for permission mode arguments.

This module defines the ``UNSET`` sentinel, the `ModeArg` type alias and
the `resolve_mode` helper used by every engine method that applies a mode.

A ``ModeArg`` argument can take three states:

* ``UNSET``: use the mode from the engine's `FileSystemConfig`.
* ``None``: leave the mode untouched (no ``chmod`` call).
* concrete ``int``: apply exactly this mode.
"""

from dataclasses import dataclass


def _get_unset() -> "_UnsetType":
    # Factory used by pickle to retrieve the one true instance.
    return UNSET


@dataclass(frozen=True)
class _UnsetType:
    """Sentinel for mode arguments that fall back to the configured default.

    This is distinct from `None`, which disables the ``chmod`` call.
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self):  # keep singleton on pickle
        return (_get_unset, ())


# Singleton instance
UNSET = _UnsetType()

type ModeArg = int | _UnsetType | None


def resolve_mode(value: ModeArg, configured: int | None) -> int | None:
    """Resolve a tri-state mode argument against the configured default.

    Args:
        value: The mode passed by the caller (may be UNSET, None, or an int).
        configured: The mode from the engine's configuration.

    Returns:
        ``configured`` if ``value`` is UNSET, otherwise ``value``.
    """
    if isinstance(value, _UnsetType):
        return configured
    return value
