"""
Pytest configuration and shared fixtures for votecast tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async port mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from tests.helpers.builders import TEST_NOW
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"

@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from votecast import __version__

    return __version__

@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Controllable clock frozen at TEST_NOW."""
    return FakeTimeAuthority(frozen_at=TEST_NOW)
