"""
Integration test configuration.

Integration tests drive the full engine (services, request updater,
in-memory stores and caches) through tests.helpers.validation_engine.
Every test collected from this directory is marked ``integration`` so
the suite can be run or skipped with ``-m integration``.
"""

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if "tests/integration" in item.nodeid.replace("\\", "/"):
            item.add_marker(pytest.mark.integration)
