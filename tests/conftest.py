"""
Pytest configuration and shared fixtures for validation engine tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from src.bootstrap.validation import reset_validation_dependencies


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture(autouse=True)
def _reset_validation_singletons():
    """Give every test fresh bootstrap singletons."""
    reset_validation_dependencies()
    yield
    reset_validation_dependencies()
