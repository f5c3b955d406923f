"""Global pytest fixtures and default marks for PYNCER UTILS."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pyncer_utils.config import DEFAULT_CONFIG
from pyncer_utils.fs import FileSystem
from tests.helpers.trees import TreeSpec, build_tree

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
FOLDER_MARKERS = {"unit": pytest.mark.unit, "integration": pytest.mark.integration}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with its top-level folder (`unit` or `integration`)."""
    for item in items:
        path = item.path.resolve()
        if TESTS_ROOT not in path.parents:
            continue

        marker = FOLDER_MARKERS.get(path.relative_to(TESTS_ROOT).parts[0])
        if marker is not None and item.get_closest_marker(marker.name) is None:
            item.add_marker(marker)


# ============================================================================
#                              Fixtures
# ============================================================================


@pytest.fixture
def filesystem() -> FileSystem:
    """Tree engine with the default configuration."""
    return FileSystem(DEFAULT_CONFIG)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, TreeSpec], Path]:
    """Factory that builds a named tree under ``tmp_path``.

    Example:
        ```py
        src = make_tree("src", {"a.txt": "A", "sub": {"b.txt": "B"}})
        ```
    """

    def make(name: str, spec: TreeSpec) -> Path:
        return build_tree(tmp_path / name, spec)

    return make
