"""Global pytest configuration for PACTVERIFY.

Tests are marked by the directory they live in (``tests/unit/`` gets
``unit``, and so on) unless they already carry that mark explicitly.
"""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
DIRECTORY_MARKERS = {
    TESTS_ROOT / "unit": "unit",
    TESTS_ROOT / "contract": "contract",
    TESTS_ROOT / "integration": "integration",
    TESTS_ROOT / "e2e": "e2e",
}

pytest_plugins = [
    "tests.fixtures.contracts",
    "tests.fixtures.provider",
]


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the default directory mark to every collected item."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        for root, marker_name in DIRECTORY_MARKERS.items():
            if root in path.parents and not any(
                marker.name == marker_name for marker in item.iter_markers()
            ):
                item.add_marker(getattr(pytest.mark, marker_name))
