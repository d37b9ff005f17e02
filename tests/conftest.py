"""Shared pytest fixtures for CourseHub tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio

from coursehub.auth import clear_config_cache

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test with fresh settings and no cached mock identity source.

    Environment variables that would leak a developer's configuration into
    the test run are removed.
    """
    for var in (
        "DEV__AUTH_MOCK",
        "STYTCH__PROJECT_ID",
        "STYTCH__SECRET",
        "STYTCH__DEFAULT_ORG_ID",
        "NAVIGATION__AUTH_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest_asyncio.fixture
async def mock_stytch_client() -> AsyncIterator[MagicMock]:
    """Create a mocked Stytch B2BClient for unit tests.

    Patches the B2BClient constructor to return a mock, allowing
    tests to set up expected responses without making real API calls.
    """
    with patch("coursehub.auth.client.B2BClient") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client
        yield mock_client
