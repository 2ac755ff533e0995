"""Fixtures for testing the YouTube Music bridge."""

import json
import logging
import pathlib
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from ytmusic_bridge.models import ThumbnailQuality
from ytmusic_bridge.session import AuthState, SessionContext

FIXTURES_DIR = pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture(name="caplog")
def caplog_fixture(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Set log level to debug for tests using the caplog fixture."""
    caplog.set_level(logging.DEBUG)
    return caplog


@pytest.fixture
def load_fixture() -> Callable[[str], dict[str, Any]]:
    """Return a loader for the JSON fixtures."""

    def _load(name: str) -> dict[str, Any]:
        result: dict[str, Any] = json.loads((FIXTURES_DIR / name).read_text())
        return result

    return _load


@pytest.fixture
def session() -> SessionContext:
    """Return an anonymous session."""
    return SessionContext()


@pytest.fixture
def logged_in_session(session: SessionContext) -> SessionContext:
    """Return a session logged in as UC_own."""
    session.set_auth(AuthState({"Cookie": "SAPISID=abc", "Authorization": "x"}, "UC_own"))
    return session


@pytest.fixture
def provider_mock(session: SessionContext) -> Mock:
    """Return a mock provider."""
    provider = Mock()
    provider.api = AsyncMock()
    provider.logger = Mock()
    provider.session = session
    provider.settings.thumbnail_quality = ThumbnailQuality.LOW
    provider.settings.use_mp4_format = False
    provider.settings.resolve_music_for_videos = True
    provider.settings.visitor_id = None
    return provider
