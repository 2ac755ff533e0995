"""YouTube Music bridge implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .api_client import YTMusicAPIClient
from .config import YTMusicSettings
from .constants import (
    LOGGER_NAME,
    PLAYLIST_BROWSE_PREFIX,
    SHARE_ALBUM_URL,
    SHARE_CHANNEL_URL,
    SHARE_PLAYLIST_URL,
    SHARE_TRACK_URL,
)
from .helpers.aiohttp_client import create_clientsession
from .library import YTMusicLibraryManager
from .login import YTMusicLoginManager
from .media import YTMusicMediaManager
from .models import Album, Artist, Playlist, Radio, Track, User
from .playlist import YTMusicPlaylistManager
from .session import SessionContext
from .streaming import YTMusicStreamingManager

if TYPE_CHECKING:
    import aiohttp
    from music_assistant_models.enums import StreamType

    from .config import ConfigStore
    from .helpers.paging import PagedData
    from .models import Lyrics, MediaItem, QuickSearchItem, Shelf, Streamable, Tab


class YTMusicProvider:
    """Host facing entry point of the YouTube Music bridge."""

    def __init__(
        self,
        config_store: ConfigStore,
        http_session: aiohttp.ClientSession | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the bridge.

        Without an ``http_session`` the bridge creates (and owns) its own.
        """
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._owns_http_session = http_session is None
        self.http_session = http_session or create_clientsession()
        self.settings = YTMusicSettings(config_store)
        self.session = SessionContext(self.settings.thumbnail_quality)
        self.api = YTMusicAPIClient(self)
        self.login = YTMusicLoginManager(self)
        self.media = YTMusicMediaManager(self)
        self.library = YTMusicLibraryManager(self)
        self.playlists = YTMusicPlaylistManager(self)
        self.streaming = YTMusicStreamingManager(self)

    async def handle_async_init(self) -> None:
        """Start an anonymous session."""
        self.session.start(self.settings.thumbnail_quality)
        await self.login.ensure_visitor_id()

    async def close(self) -> None:
        """Release the HTTP session if the bridge created it."""
        if self._owns_http_session:
            await self.http_session.close()

    # Login

    def get_login_webview(self) -> tuple[str, str]:
        """Return the login view's initial url and stop url pattern."""
        return self.login.get_login_webview()

    async def on_login_webview_stop(self, url: str, cookie: str) -> list[User]:
        """Return the accounts available for a captured login cookie."""
        return await self.login.on_login_webview_stop(url, cookie)

    async def set_login_user(self, user: User | None) -> None:
        """Log in as a user, or log out."""
        await self.login.set_login_user(user)

    async def get_current_user(self) -> User | None:
        """Return the logged in account."""
        return await self.login.get_current_user()

    # Feeds and search

    async def get_home_tabs(self) -> list[Tab]:
        """Return the tabs of the home feed."""
        return await self.media.get_home_tabs()

    def get_home_feed(self, tab: Tab | None = None) -> PagedData[Shelf]:
        """Return the home feed."""
        return self.media.get_home_feed(tab)

    def get_library_tabs(self) -> list[Tab]:
        """Return the library sections."""
        return self.library.get_library_tabs()

    def get_library_feed(self, tab: Tab | None = None) -> PagedData[MediaItem]:
        """Return a library section."""
        return self.library.get_library_feed(tab)

    async def search_tabs(self, query: str | None) -> list[Tab]:
        """Return the tabs of a search."""
        return await self.media.search_tabs(query)

    def search_feed(self, query: str | None, tab: Tab | None = None) -> PagedData[Shelf]:
        """Return search results."""
        return self.media.search_feed(query, tab)

    async def quick_search(self, query: str | None) -> list[QuickSearchItem]:
        """Return search suggestions."""
        return await self.media.quick_search(query)

    async def delete_search_history(self, item: QuickSearchItem) -> None:
        """Remove a search history entry."""
        await self.media.delete_search_history(item)

    # Loads

    async def load_track(self, track: Track) -> Track:
        """Load a track with its streams."""
        return await self.streaming.load_track(track)

    def get_streamable_media(self, streamable: Streamable) -> tuple[str, StreamType]:
        """Return the url and transport of a streamable."""
        return self.streaming.get_streamable_media(streamable)

    async def load_album(self, album: Album) -> Album:
        """Load an album."""
        return await self.media.load_album(album)

    async def load_playlist(self, playlist: Playlist) -> Playlist:
        """Load a playlist."""
        return await self.media.load_playlist(playlist)

    def load_tracks(self, container: Album | Playlist | Radio) -> PagedData[Track]:
        """Return the tracks of a loaded container or of a radio."""
        if isinstance(container, Radio):
            return self.load_radio_tracks(container)
        return self.media.load_tracks(container)

    def load_radio_tracks(self, radio: Radio) -> PagedData[Track]:
        """Return the tracks of a radio."""
        return self.media.load_radio_tracks(radio)

    async def load_artist(self, artist: Artist) -> Artist:
        """Load an artist."""
        return await self.media.load_artist(artist)

    async def load_user(self, user: User) -> User:
        """Load a channel as a user."""
        return await self.media.load_user(user)

    def get_shelves(self, item: MediaItem) -> PagedData[Shelf]:
        """Return the rows related to an item."""
        match item:
            case Track():
                return self.media.get_track_shelves(item)
            case Album():
                return self.media.get_album_shelves(item)
            case Playlist():
                return self.media.get_playlist_shelves(item)
            case Artist():
                return self.media.get_artist_shelves(item)
            case User():
                return self.media.get_user_shelves(item)
        raise TypeError(f"Unsupported item {item!r}")

    async def radio(self, item: MediaItem, context: Radio | None = None) -> Radio:
        """Start a radio seeded by an item."""
        match item:
            case Track():
                return await self.media.radio_for_track(item, context)
            case Album():
                return await self.media.radio_for_album(item)
            case Playlist():
                return await self.media.radio_for_playlist(item)
            case Artist():
                return await self.media.radio_for_artist(item)
            case User():
                return await self.media.radio_for_user(item)
        raise TypeError(f"Unsupported item {item!r}")

    def search_track_lyrics(self, track: Track) -> PagedData[Lyrics]:
        """Return the lyrics of a track."""
        return self.media.search_track_lyrics(track)

    # Library

    async def like_track(self, track: Track, liked: bool) -> None:
        """Like or unlike a track."""
        await self.library.like_track(track, liked)

    async def follow_artist(self, artist: Artist) -> bool:
        """Follow an artist."""
        return await self.library.follow_artist(artist)

    async def unfollow_artist(self, artist: Artist) -> bool:
        """Unfollow an artist."""
        return await self.library.unfollow_artist(artist)

    async def mark_as_played(self, track: Track) -> None:
        """Add a track to the account's watch history."""
        await self.library.mark_as_played(track)

    # Playlists

    async def create_playlist(self, title: str, description: str | None = None) -> Playlist:
        """Create a playlist."""
        return await self.playlists.create(title, description)

    async def delete_playlist(self, playlist: Playlist) -> None:
        """Delete a playlist."""
        await self.playlists.delete(playlist)

    async def list_editable_playlists(self) -> list[Playlist]:
        """List the account's playlists."""
        return await self.playlists.list_editable()

    async def edit_playlist_metadata(
        self, playlist: Playlist, title: str, description: str | None = None
    ) -> None:
        """Rename a playlist."""
        await self.playlists.edit_metadata(playlist, title, description)

    async def remove_tracks_from_playlist(
        self, playlist: Playlist, tracks: list[Track], indexes: list[int]
    ) -> None:
        """Remove tracks by index."""
        await self.playlists.remove_tracks(playlist, tracks, indexes)

    async def add_tracks_to_playlist(
        self, playlist: Playlist, tracks: list[Track], index: int, new_tracks: list[Track]
    ) -> None:
        """Insert tracks before an index."""
        await self.playlists.add_tracks(playlist, tracks, index, new_tracks)

    async def move_track_in_playlist(
        self, playlist: Playlist, tracks: list[Track], from_index: int, to_index: int
    ) -> None:
        """Move a track to another index."""
        await self.playlists.move_track(playlist, tracks, from_index, to_index)

    # Share

    def on_share(self, item: MediaItem | Radio) -> str:
        """Return the public link of an item."""
        match item:
            case Track():
                return SHARE_TRACK_URL.format(item_id=item.id)
            case Album():
                return SHARE_ALBUM_URL.format(item_id=item.id)
            case Playlist() | Radio():
                return SHARE_PLAYLIST_URL.format(
                    item_id=item.id.removeprefix(PLAYLIST_BROWSE_PREFIX)
                )
            case Artist() | User():
                return SHARE_CHANNEL_URL.format(item_id=item.id)
        raise TypeError(f"Unsupported item {item!r}")
