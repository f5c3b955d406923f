"""Library-wide error definitions.

Two families of errors are raised by this package:

- `InvalidArgumentError`: the caller supplied malformed or unsafe input
  (a URI without a scheme, a relative directory, a bad config value).
- `OperationError`: an operation could not complete against the live
  filesystem (missing source, existing destination, OS-level failure).

Both inherit from the matching built-in (`ValueError` / `RuntimeError`) so
callers that already catch those keep working.
"""

# ============================================================================
#                               Base errors
# ============================================================================


class PyncerError(Exception):
    """Base class for all pyncer_utils errors."""


class InvalidArgumentError(PyncerError, ValueError):
    """Raised when a caller supplies malformed or unsafe input."""


class OperationError(PyncerError, RuntimeError):
    """Raised when an operation cannot be completed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


# ============================================================================
#                           Invalid argument errors
# ============================================================================


class InvalidUriError(InvalidArgumentError):
    """Raised when a URI is missing its scheme separator."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Invalid uri. ({uri})")
        self.uri = uri


class InvalidDirectoryError(InvalidArgumentError):
    """Raised when a path is not an absolute directory or not a directory at all."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"Invalid directory. ({path})"
        if reason is not None:
            message = f"Invalid directory ({path}): {reason}"
        super().__init__(message)
        self.path = path


class InvalidConfigError(InvalidArgumentError):
    """Raised when a configuration value cannot be parsed."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value


# ============================================================================
#                             Operation errors
# ============================================================================


class PathNotFoundError(OperationError):
    """Raised when a required source path does not exist."""

    def __init__(self, path: str, role: str = "Source") -> None:
        super().__init__(f"{role} does not exist. ({path})", path)
        self.role = role


class DestinationExistsError(OperationError):
    """Raised when a destination exists and overwriting was not requested."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Destination already exists. ({path})", path)


class DestinationKindError(OperationError):
    """Raised when a destination exists but is the wrong kind of entry."""

    def __init__(self, path: str, expected: str) -> None:
        super().__init__(f"Destination is not a {expected}. ({path})", path)
        self.expected = expected
