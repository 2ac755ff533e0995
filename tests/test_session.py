"""Test the session context: auth guard and track list cache."""

from unittest.mock import AsyncMock, Mock

import pytest
from aiohttp import ClientResponseError

from ytmusic_bridge.errors import LoginRequired, MediaNotFoundError, Unauthorized
from ytmusic_bridge.helpers.paging import PagedData
from ytmusic_bridge.models import ThumbnailQuality
from ytmusic_bridge.session import AuthState, SessionContext, TrackListCache


def _response_error(status: int) -> ClientResponseError:
    return ClientResponseError(Mock(), (), status=status, message="error")


async def test_with_auth_requires_login(session: SessionContext) -> None:
    """Test guarded operations fail without a session and are not run."""
    operation = AsyncMock()

    with pytest.raises(LoginRequired):
        await session.with_auth(operation)

    operation.assert_not_awaited()


async def test_with_auth_passes_state(logged_in_session: SessionContext) -> None:
    """Test the operation receives the current auth state."""
    operation = AsyncMock(return_value="ok")

    assert await logged_in_session.with_auth(operation) == "ok"
    operation.assert_awaited_once_with(logged_in_session.auth)


async def test_with_auth_unauthorized(logged_in_session: SessionContext) -> None:
    """Test a 401 is reported for the session's own identity."""
    operation = AsyncMock(side_effect=_response_error(401))

    with pytest.raises(Unauthorized) as exc_info:
        await logged_in_session.with_auth(operation)

    assert exc_info.value.user_id == "UC_own"


async def test_with_auth_unauthorized_unknown_identity(session: SessionContext) -> None:
    """Test a 401 without a known identity asks for a login."""
    session.set_auth(AuthState({"Cookie": "c"}))
    operation = AsyncMock(side_effect=_response_error(401))

    with pytest.raises(LoginRequired):
        await session.with_auth(operation)


@pytest.mark.parametrize("error", [_response_error(403), _response_error(500), ValueError("x")])
async def test_with_auth_other_errors_propagate(
    logged_in_session: SessionContext, error: Exception
) -> None:
    """Test every other failure propagates unchanged."""
    operation = AsyncMock(side_effect=error)

    with pytest.raises(type(error)) as exc_info:
        await logged_in_session.with_auth(operation)

    assert exc_info.value is error


def test_set_auth_replaces_state(logged_in_session: SessionContext) -> None:
    """Test logging out clears the identity."""
    assert logged_in_session.own_channel_id == "UC_own"

    logged_in_session.set_auth(None)

    assert logged_in_session.auth is None
    assert logged_in_session.own_channel_id is None


async def test_track_list_cache_replace() -> None:
    """Test a reload replaces the entry while earlier sources stay usable."""
    cache = TrackListCache()
    first = PagedData.single(AsyncMock(return_value=["old"]))
    second = PagedData.single(AsyncMock(return_value=["new"]))

    cache.put("VLPL1", first)
    held = cache.get("VLPL1")
    cache.put("VLPL1", second)

    assert cache.get("VLPL1") is second
    assert await held.load_all() == ["old"]
    assert "VLPL1" in cache


def test_track_list_cache_missing() -> None:
    """Test reading tracks of a container that was never loaded."""
    with pytest.raises(MediaNotFoundError):
        TrackListCache().get("MPREb_unknown")


def test_start_fixes_thumbnail_quality() -> None:
    """Test the thumbnail tier is the one given when the session starts."""
    session = SessionContext(ThumbnailQuality.HIGH)
    assert session.thumbnail_quality == ThumbnailQuality.HIGH

    session.start(ThumbnailQuality.LOW)

    assert session.thumbnail_quality == ThumbnailQuality.LOW
