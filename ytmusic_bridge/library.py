"""Library operations for YouTube Music."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import EXTRA_SUB_ID, LIBRARY_LANDING_ID, LIBRARY_TABS
from .errors import InvalidDataError
from .helpers.paging import Page, PagedData
from .models import Tab
from .parsers import parse_media_items
from .renderers import decode_library_page, decode_player

if TYPE_CHECKING:
    from .models import Artist, MediaItem, Track
    from .provider import YTMusicProvider
    from .session import AuthState


class YTMusicLibraryManager:
    """Manages the YouTube Music library of the logged in account."""

    def __init__(self, provider: YTMusicProvider):
        """Initialize library manager."""
        self.provider = provider
        self.api = provider.api
        self.session = provider.session
        self.logger = provider.logger

    def get_library_tabs(self) -> list[Tab]:
        """Return the library sections."""
        return [Tab(id=browse_id, title=title) for browse_id, title in LIBRARY_TABS]

    def get_library_feed(self, tab: Tab | None = None) -> PagedData[MediaItem]:
        """Return the items of a library section.

        The liked songs container is not presentable and is left out.
        """
        browse_id = tab.id if tab else LIBRARY_LANDING_ID
        quality = self.session.thumbnail_quality

        async def _page(continuation: str | None) -> Page[MediaItem]:
            async def _browse(auth: AuthState) -> Page[MediaItem]:
                response = await self.api.browse(
                    None if continuation else browse_id, continuation=continuation, auth=auth
                )
                items, next_continuation = decode_library_page(response)
                return Page(
                    parse_media_items(items, quality, auth.own_channel_id), next_continuation
                )

            return await self.session.with_auth(_browse)

        return PagedData.continuous(_page)

    async def like_track(self, track: Track, liked: bool) -> None:
        """Like a track, or remove the like."""

        async def _rate(auth: AuthState) -> None:
            await self.api.rate_song(track.id, liked, auth)

        await self.session.with_auth(_rate)

    async def _set_subscribed(self, artist: Artist, subscribed: bool) -> bool:
        if not (sub_id := artist.extras.get(EXTRA_SUB_ID)):
            raise InvalidDataError(f"No subscription id found for {artist.name}")

        async def _subscribe(auth: AuthState) -> None:
            await self.api.set_subscribed(artist.id, sub_id, subscribed, auth)

        await self.session.with_auth(_subscribe)
        return True

    async def follow_artist(self, artist: Artist) -> bool:
        """Subscribe to an artist."""
        return await self._set_subscribed(artist, True)

    async def unfollow_artist(self, artist: Artist) -> bool:
        """Unsubscribe from an artist."""
        return await self._set_subscribed(artist, False)

    async def mark_as_played(self, track: Track) -> None:
        """Add a track to the watch history of the logged in account.

        Anonymous sessions have no history, so nothing is sent.
        """
        if self.session.auth is None:
            self.logger.debug("Not marking %s as played: not logged in", track.id)
            return

        async def _mark(auth: AuthState) -> None:
            video = decode_player(await self.api.player(track.id, auth))
            if not video.playback_url:
                raise InvalidDataError(f"No playback tracking url found for {track.id}")
            await self.api.track_playback(video.playback_url, auth)

        await self.session.with_auth(_mark)
