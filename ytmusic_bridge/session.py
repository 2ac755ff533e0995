"""Session-wide state: authentication and loaded track lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from aiohttp import ClientResponseError

from .constants import LOGGER_NAME
from .errors import LoginRequired, MediaNotFoundError, Unauthorized
from .models import ThumbnailQuality

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from .helpers.paging import PagedData
    from .models import Track

LOGGER = logging.getLogger(f"{LOGGER_NAME}.session")


@dataclass(frozen=True)
class AuthState:
    """Credential headers and identity of the logged in account."""

    headers: Mapping[str, str]
    own_channel_id: str | None = None


@dataclass
class TrackListCache:
    """Track sources of loaded albums and playlists, keyed by container id.

    Entries are written by the album/playlist load operations and live for
    the whole session. Reloading a container replaces its entry; sources
    handed out earlier stay usable.
    """

    _sources: dict[str, PagedData[Track]] = field(default_factory=dict)

    def put(self, container_id: str, source: PagedData[Track]) -> None:
        """Store (or replace) the track source of a container."""
        self._sources[container_id] = source

    def get(self, container_id: str) -> PagedData[Track]:
        """Return the track source of a container loaded earlier."""
        try:
            return self._sources[container_id]
        except KeyError as err:
            raise MediaNotFoundError(
                f"Tracks of {container_id} requested before it was loaded"
            ) from err

    def __contains__(self, container_id: object) -> bool:
        """Return whether the container was loaded."""
        return container_id in self._sources


class SessionContext:
    """Mutable state shared by every component of one session.

    ``auth`` is written only by login/logout and is replaced wholesale,
    ``track_lists`` only by album/playlist loads. ``thumbnail_quality`` is
    fixed when the session starts and read by every normalisation.
    """

    def __init__(self, thumbnail_quality: ThumbnailQuality = ThumbnailQuality.LOW) -> None:
        """Initialize an anonymous session."""
        self._auth: AuthState | None = None
        self.thumbnail_quality = thumbnail_quality
        self.track_lists = TrackListCache()

    def start(self, thumbnail_quality: ThumbnailQuality) -> None:
        """Begin a session with the thumbnail tier selected at this moment."""
        self.thumbnail_quality = thumbnail_quality
        LOGGER.debug("Session started with %s thumbnails", thumbnail_quality)

    @property
    def auth(self) -> AuthState | None:
        """Return the current authentication state (None when anonymous)."""
        return self._auth

    @property
    def own_channel_id(self) -> str | None:
        """Return the identity of the logged in account, if known."""
        return self._auth.own_channel_id if self._auth else None

    def set_auth(self, state: AuthState | None) -> None:
        """Replace the authentication state."""
        self._auth = state
        if state is None:
            LOGGER.info("Logged out")
        else:
            LOGGER.info("Logged in as %s", state.own_channel_id or "default account")

    async def with_auth[T](self, operation: Callable[[AuthState], Awaitable[T]]) -> T:
        """Run an operation that requires a session.

        A 401 from the server is reported as :class:`Unauthorized` for the
        session's own identity, or as :class:`LoginRequired` when that
        identity is unknown. Everything else propagates unchanged.
        """
        state = self._auth
        if state is None:
            raise LoginRequired
        try:
            return await operation(state)
        except ClientResponseError as err:
            if err.status != 401:
                raise
            LOGGER.warning("Session rejected by server: %s", err.message)
            if state.own_channel_id is None:
                raise LoginRequired from err
            raise Unauthorized(state.own_channel_id) from err
