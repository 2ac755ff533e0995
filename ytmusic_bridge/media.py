"""Catalog browsing for YouTube Music: feeds, search, loads, shelves and radio."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aiohttp import ClientError

from .constants import (
    ALL_TAB_ID,
    EXTRA_LYRICS_ID,
    EXTRA_RELATED_ID,
    HOME_BROWSE_ID,
    TRACK_REDIRECT_PREFIX,
)
from .errors import InvalidDataError, MediaNotFoundError, MusicAssistantError
from .helpers.paging import Page, PagedData
from .models import Lyric, Lyrics, QuickSearchItem, Radio, Shelf, Tab, ThumbnailQuality, Track
from .parsers import (
    is_singles_layout,
    parse_album,
    parse_artist,
    parse_media_items,
    parse_playlist,
    parse_shelf,
    parse_track,
    parse_user,
    user_to_artist,
)
from .raw import RawPlaylist, RawPlaylistType, RawSong
from .renderers import (
    decode_artist_page,
    decode_browse_items,
    decode_feed,
    decode_lyrics,
    decode_playlist_continuation,
    decode_playlist_page,
    decode_search,
    decode_search_continuation,
    decode_search_suggestions,
    decode_watch_next,
)

if TYPE_CHECKING:
    from .models import Album, Artist, MediaItem, Playlist, User
    from .provider import YTMusicProvider
    from .raw import RawArtist, RawLayout
    from .session import AuthState

RADIO_PARAMS = "wAEB"


class YTMusicMediaManager:
    """Manages YouTube Music catalog operations."""

    def __init__(self, provider: YTMusicProvider):
        """Initialize media manager."""
        self.provider = provider
        self.api = provider.api
        self.session = provider.session
        self.logger = provider.logger
        self._last_search: tuple[str, list[Shelf]] | None = None
        self._loaded_artist: tuple[RawArtist, list[RawLayout]] | None = None

    @property
    def quality(self) -> ThumbnailQuality:
        """Return the thumbnail quality fixed when the session started."""
        return self.session.thumbnail_quality

    def _view_more(
        self, layout: RawLayout, quality: ThumbnailQuality
    ) -> PagedData[MediaItem] | None:
        """Return the lazily loaded "view more" items of a row, if it has any."""
        if not (browse_id := layout.view_more_browse_id):
            return None
        single = is_singles_layout(layout)

        async def _load() -> list[MediaItem]:
            response = await self.api.browse(browse_id, layout.view_more_params)
            return parse_media_items(
                decode_browse_items(response), quality, self.session.own_channel_id, single
            )

        return PagedData.single(_load)

    def _to_shelves(
        self, layouts: list[RawLayout], quality: ThumbnailQuality | None = None
    ) -> list[Shelf]:
        if quality is None:
            quality = self.quality
        own_channel_id = self.session.own_channel_id
        return [
            parse_shelf(layout, quality, own_channel_id, self._view_more(layout, quality))
            for layout in layouts
        ]

    def _feed(self, params: str | None = None) -> PagedData[Shelf]:
        """Return the home feed, optionally filtered by a chip."""
        quality = self.quality

        async def _page(continuation: str | None) -> Page[Shelf]:
            if continuation is None:
                response = await self.api.browse(HOME_BROWSE_ID, params)
            else:
                response = await self.api.browse(continuation=continuation)
            feed = decode_feed(response)
            return Page(self._to_shelves(feed.layouts, quality), feed.continuation)

        return PagedData.continuous(_page)

    async def _feed_tabs(self) -> list[Tab]:
        feed = decode_feed(await self.api.browse(HOME_BROWSE_ID))
        return [Tab(id=chip.params, title=chip.text) for chip in feed.chips]

    async def get_home_tabs(self) -> list[Tab]:
        """Return the mood/genre chips of the home feed."""
        return await self._feed_tabs()

    def get_home_feed(self, tab: Tab | None = None) -> PagedData[Shelf]:
        """Return the home feed."""
        return self._feed(tab.id if tab else None)

    async def search_tabs(self, query: str | None) -> list[Tab]:
        """Return the tabs of a search.

        Searching with a query also memoises the unfiltered result, so the
        "All" tab of the same query does not search again.
        """
        if query is None:
            return await self._feed_tabs()
        categories, _ = decode_search(await self.api.search(query))
        self._last_search = (
            query,
            self._to_shelves([layout for layout, _ in categories]),
        )
        tabs = [
            Tab(id=chip.params, title=layout.title or "???")
            for layout, chip in categories
            if chip is not None
        ]
        return [Tab(id=ALL_TAB_ID, title=ALL_TAB_ID), *tabs]

    def search_feed(self, query: str | None, tab: Tab | None = None) -> PagedData[Shelf]:
        """Return the results of a search, or a filtered feed when there is no query."""
        if query is None:
            if tab is None:
                return PagedData.single(_no_shelves)
            return self._feed(tab.id)
        if tab is None or tab.id == ALL_TAB_ID:

            async def _all() -> list[Shelf]:
                if self._last_search and self._last_search[0] == query:
                    return self._last_search[1]
                categories, _ = decode_search(await self.api.search(query))
                shelves = self._to_shelves([layout for layout, _ in categories])
                self._last_search = (query, shelves)
                return shelves

            return PagedData.single(_all)

        quality = self.quality

        async def _filtered(continuation: str | None) -> Page[Shelf]:
            response = await self.api.search(query, tab.id, continuation)
            items, next_continuation = decode_search_continuation(response)
            media_items = parse_media_items(items, quality, self.session.own_channel_id)
            return Page([Shelf(title=tab.title, items=media_items)], next_continuation)

        return PagedData.continuous(_filtered)

    async def quick_search(self, query: str | None) -> list[QuickSearchItem]:
        """Return search suggestions; failures yield no suggestions."""
        if not query:
            return []
        try:
            response = await self.api.get_search_suggestions(query)
        except (ClientError, TimeoutError, MusicAssistantError) as err:
            self.logger.warning("Failed to load search suggestions: %s", err)
            return []
        return [
            QuickSearchItem(query=text, from_history=from_history)
            for text, from_history, _ in decode_search_suggestions(response)
        ]

    async def delete_search_history(self, item: QuickSearchItem) -> None:
        """Remove a query from the account's search history."""

        async def _delete(auth: AuthState) -> None:
            response = await self.api.get_search_suggestions(item.query)
            tokens = [
                token
                for text, from_history, token in decode_search_suggestions(response)
                if from_history and token and text == item.query
            ]
            if not tokens:
                self.logger.debug("No history entry found for %s", item.query)
                return
            await self.api.feedback(tokens, auth)

        await self.session.with_auth(_delete)

    async def _load_container(self, container_id: str) -> tuple[RawPlaylist, str | None]:
        """Load an album/playlist page and cache its track source."""
        quality = self.quality
        own_channel_id = self.session.own_channel_id
        raw, related = decode_playlist_page(
            await self.api.browse(container_id), container_id, own_channel_id
        )
        first_page = Page(
            [self._container_track(song, raw, quality) for song in raw.items or []],
            raw.continuation,
        )

        async def _tracks(continuation: str | None) -> Page[Track]:
            if continuation is None:
                return first_page
            songs, next_continuation = decode_playlist_continuation(
                await self.api.browse(continuation=continuation)
            )
            tracks = [self._container_track(song, raw, quality) for song in songs]
            return Page(tracks, next_continuation)

        self.session.track_lists.put(container_id, PagedData.continuous(_tracks))
        return raw, related

    def _container_track(
        self, song: RawSong, container: RawPlaylist, quality: ThumbnailQuality
    ) -> Track:
        """Parse an entry of a container; album rows inherit the album's details."""
        if container.playlist_type == RawPlaylistType.ALBUM:
            song.artists = song.artists or container.artists
            song.thumbnail_provider = song.thumbnail_provider or container.thumbnail_provider
            song.album = song.album or RawPlaylist(
                id=container.id,
                name=container.name,
                playlist_type=RawPlaylistType.ALBUM,
                year=container.year,
            )
        return parse_track(song, quality)

    async def load_album(self, album: Album) -> Album:
        """Load an album and cache its track list."""
        raw, _ = await self._load_container(album.id)
        return parse_album(raw, ThumbnailQuality.HIGH)

    async def load_playlist(self, playlist: Playlist) -> Playlist:
        """Load a playlist and cache its track list."""
        raw, related = await self._load_container(playlist.id)
        return parse_playlist(raw, ThumbnailQuality.HIGH, self.session.own_channel_id, related)

    def load_tracks(self, container: Album | Playlist) -> PagedData[Track]:
        """Return the track source of a container loaded earlier."""
        return self.session.track_lists.get(container.id)

    async def _artist_page(self, artist_id: str) -> tuple[RawArtist, list[RawLayout]]:
        if self._loaded_artist and self._loaded_artist[0].id == artist_id:
            return self._loaded_artist
        return decode_artist_page(await self.api.browse(artist_id), artist_id)

    async def load_artist(self, artist: Artist) -> Artist:
        """Load an artist page."""
        self._loaded_artist = decode_artist_page(await self.api.browse(artist.id), artist.id)
        return parse_artist(self._loaded_artist[0], ThumbnailQuality.HIGH)

    async def load_user(self, user: User) -> User:
        """Load a channel page as a user."""
        await self.load_artist(user_to_artist(user))
        assert self._loaded_artist is not None
        return parse_user(self._loaded_artist[0], ThumbnailQuality.HIGH)

    def get_artist_shelves(self, artist: Artist) -> PagedData[Shelf]:
        """Return the rows of an artist page."""

        async def _load() -> list[Shelf]:
            _, layouts = await self._artist_page(artist.id)
            return self._to_shelves(layouts)

        return PagedData.single(_load)

    def get_user_shelves(self, user: User) -> PagedData[Shelf]:
        """Return the rows of a channel page."""
        return self.get_artist_shelves(user_to_artist(user))

    async def _related_shelves(self, track: Track) -> list[Shelf]:
        if not (related_id := track.extras.get(EXTRA_RELATED_ID)):
            raise MediaNotFoundError(f"No related id found for {track.id}")
        return self._to_shelves(decode_feed(await self.api.browse(related_id)).layouts)

    def get_track_shelves(self, track: Track) -> PagedData[Shelf]:
        """Return the rows related to a track."""
        return PagedData.single(lambda: self._related_shelves(track))

    def get_album_shelves(self, album: Album) -> PagedData[Shelf]:
        """Return the rows related to the last track of an album."""

        async def _load() -> list[Shelf]:
            tracks = await self.load_tracks(album).load_all()
            if not tracks:
                return []
            return await self._related_shelves(await self.provider.streaming.load_track(tracks[-1]))

        return PagedData.single(_load)

    def get_playlist_shelves(self, playlist: Playlist) -> PagedData[Shelf]:
        """Return the rows related to a playlist.

        The related id is either a page cursor or a track redirect, in which
        case the rows related to that track are used.
        """

        async def _load() -> list[Shelf]:
            related = playlist.extras.get(EXTRA_RELATED_ID)
            if not related:
                raise InvalidDataError(f"No related id found for {playlist.id}")
            if related.startswith(TRACK_REDIRECT_PREFIX):
                track_id = related.removeprefix(TRACK_REDIRECT_PREFIX)
                if not track_id:
                    raise InvalidDataError(f"Invalid related id {related}")
                track = await self.provider.streaming.load_track(Track(id=track_id, title=""))
                return (await self.get_track_shelves(track).load_first()).items
            feed = decode_feed(await self.api.browse(continuation=related))
            return self._to_shelves(feed.layouts)

        return PagedData.single(_load)

    async def radio_for_track(self, track: Track, context: Radio | None = None) -> Radio:
        """Start (or continue, given the previous radio) a radio seeded by a track."""
        response = await self.api.next(
            video_id=track.id,
            playlist_id=f"RDAMVM{track.id}",
            params=RADIO_PARAMS,
            continuation=context.continuation if context else None,
        )
        songs, continuation, _, _ = decode_watch_next(response)
        return Radio(
            id=f"radio_{track.id}",
            title=f"{track.title} Radio",
            tracks=[parse_track(song, self.quality) for song in songs],
            continuation=continuation,
        )

    async def radio_for_artist(self, artist: Artist) -> Radio:
        """Start the radio of an artist."""
        raw, _ = await self._artist_page(artist.id)
        if not raw.radio_playlist_id:
            raise MediaNotFoundError(f"No radio available for {artist.name}")
        response = await self.api.next(playlist_id=raw.radio_playlist_id, params=RADIO_PARAMS)
        songs, _, _, _ = decode_watch_next(response)
        return Radio(
            id=f"radio_{artist.id}",
            title=f"{artist.name} Radio",
            tracks=[parse_track(song, self.quality) for song in songs],
        )

    async def radio_for_user(self, user: User) -> Radio:
        """Start the radio of a channel."""
        return await self.radio_for_artist(user_to_artist(user))

    async def _radio_for_container(self, container: Album | Playlist) -> Radio:
        if container.id not in self.session.track_lists:
            await self._load_container(container.id)
        tracks = await self.load_tracks(container).load_all()
        if not tracks:
            raise MediaNotFoundError("No tracks found")
        return await self.radio_for_track(tracks[-1])

    async def radio_for_album(self, album: Album) -> Radio:
        """Start a radio seeded by the last track of an album."""
        return await self._radio_for_container(album)

    async def radio_for_playlist(self, playlist: Playlist) -> Radio:
        """Start a radio seeded by the last track of a playlist."""
        return await self._radio_for_container(playlist)

    def load_radio_tracks(self, radio: Radio) -> PagedData[Track]:
        """Return the tracks of a radio."""

        async def _tracks() -> list[Track]:
            return radio.tracks

        return PagedData.single(_tracks)

    def search_track_lyrics(self, track: Track) -> PagedData[Lyrics]:
        """Return the lyrics of a track (none when the track has no lyrics page)."""

        async def _load() -> list[Lyrics]:
            if not (lyrics_id := track.extras.get(EXTRA_LYRICS_ID)):
                return []
            if (raw := decode_lyrics(await self.api.get_lyrics(lyrics_id))) is None:
                return []
            lines = [
                Lyric(text=line.text, start_ms=line.start_ms, end_ms=line.end_ms)
                for line in raw.lines
            ]
            return [Lyrics(id=lyrics_id, title=track.title, source=raw.source, lines=lines)]

        return PagedData.single(_load)


async def _no_shelves() -> list[Shelf]:
    return []
