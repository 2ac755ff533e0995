"""Streaming operations for YouTube Music."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import replace
from typing import TYPE_CHECKING

from music_assistant_models.enums import StreamType

from .constants import MUSIC_VIDEO_TYPE_ATV, SONGS_SEARCH_PARAMS, UNKNOWN
from .errors import InvalidDataError, MediaNotFoundError
from .helpers.hls import parse_hls_streams
from .models import Artist, Streamable, StreamableType
from .parsers import parse_track
from .raw import RawSong
from .renderers import decode_player, decode_search, decode_watch_next

if TYPE_CHECKING:
    from .models import Track
    from .provider import YTMusicProvider
    from .raw import RawVideo


class YTMusicStreamingManager:
    """Manages YouTube Music track loading and stream resolution."""

    def __init__(self, provider: YTMusicProvider):
        """Initialize streaming manager."""
        self.provider = provider
        self.api = provider.api
        self.settings = provider.settings
        self.session = provider.session
        self.logger = provider.logger

    async def load_song(self, track_id: str) -> Track:
        """Load the catalog metadata of a song."""
        songs, _, _, _ = decode_watch_next(await self.api.next(video_id=track_id))
        song = next((song for song in songs if song.id == track_id), songs[0] if songs else None)
        if song is None:
            raise MediaNotFoundError(f"Track {track_id} not found")
        return parse_track(song, self.session.thumbnail_quality)

    async def load_video(self, track_id: str) -> RawVideo:
        """Load the player response of a video."""
        return decode_player(await self.api.player(track_id))

    async def load_track(self, track: Track) -> Track:
        """Load a track with its streams.

        Catalog metadata and the player response are fetched concurrently.
        Generic videos can be swapped for the matching song when configured.
        """
        song, video = await self._load_song_and_video(track.id)
        is_music = video.music_video_type == MUSIC_VIDEO_TYPE_ATV
        streamables = await self.get_streamables(video, is_music)
        if self.settings.resolve_music_for_videos and not is_music:
            song = await self.search_song_for_video(song) or song
        return replace(
            song,
            id=video.video_id or track.id,
            description=video.description,
            artists=song.artists
            or [Artist(id=video.channel_id or "", name=video.author or UNKNOWN)],
            streamables=streamables,
            plays=video.view_count,
        )

    async def _load_song_and_video(self, track_id: str) -> tuple[Track, RawVideo]:
        """Fetch song and player concurrently; a failure cancels the other request."""
        song_task = asyncio.create_task(self.load_song(track_id))
        video_task = asyncio.create_task(self.load_video(track_id))
        try:
            await asyncio.wait([song_task, video_task], return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in (song_task, video_task):
                if not task.done():
                    task.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await task
        for task in (song_task, video_task):
            if not task.cancelled() and (err := task.exception()) is not None:
                raise err
        return song_task.result(), video_task.result()

    async def get_streamables(self, video: RawVideo, is_music: bool) -> list[Streamable]:
        """Return the streams of a video: progressive audio or HLS variants."""
        if self.settings.use_mp4_format:
            return [
                Streamable(url=fmt.url, quality=fmt.bitrate, media_type=StreamableType.AUDIO)
                for fmt in video.adaptive_formats
                if "audio" in fmt.mime_type and fmt.url
            ]
        if not video.hls_manifest_url:
            raise MediaNotFoundError(f"No stream available for {video.video_id}")
        manifest = await self.api.get_text(video.hls_manifest_url)
        return parse_hls_streams(manifest, is_music)

    async def search_song_for_video(self, track: Track) -> Track | None:
        """Find the song a generic video is a recording of.

        The first song result only counts as a match when its title equals
        the video's title.
        """
        query = " ".join([track.title, *(artist.name for artist in track.artists)])
        categories, _ = decode_search(await self.api.search(query, SONGS_SEARCH_PARAMS))
        if not categories or not categories[0][0].items:
            return None
        result = categories[0][0].items[0]
        if not isinstance(result, RawSong):
            return None
        if (result.name or UNKNOWN) != track.title:
            self.logger.debug("No song found for video %s", track.id)
            return None
        return await self.load_song(result.id)

    def get_streamable_media(self, streamable: Streamable) -> tuple[str, StreamType]:
        """Return the url and transport of a streamable."""
        if streamable.media_type not in (StreamableType.AUDIO, StreamableType.VIDEO):
            raise InvalidDataError(f"Unsupported media type {streamable.media_type}")
        return streamable.url, streamable.stream_type
