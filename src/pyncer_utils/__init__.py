"""PYNCER UTILS

Utility functions for URIs and filesystem paths. The URI engine parses,
builds, normalizes and compares URIs and bracketed query strings; the
filesystem engine sanitizes paths and filenames and performs safe recursive
copy, move, rename and delete operations.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
