"""Raw catalog records as decoded from innertube responses.

These mirror what the service returns, with every field optional. The
:mod:`parsers` module turns them into domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class RawPlaylistType(StrEnum):
    """Secondary discriminant of a playlist-shaped record."""

    PLAYLIST = "playlist"
    ALBUM = "album"
    RADIO = "radio"


@dataclass
class RawThumbnail:
    """Single thumbnail variant."""

    url: str
    width: int | None = None
    height: int | None = None


@dataclass
class RawThumbnailProvider:
    """All thumbnail variants the service offered for an item."""

    thumbnails: list[RawThumbnail] = field(default_factory=list)


@dataclass
class RawArtist:
    """Artist or channel record."""

    id: str
    name: str | None = None
    thumbnail_provider: RawThumbnailProvider | None = None
    description: str | None = None
    subscriber_count: int | None = None
    subscribe_params: str | None = None
    subscribed: bool | None = None
    radio_playlist_id: str | None = None


@dataclass
class RawSong:
    """Song or video record."""

    id: str
    name: str | None = None
    artists: list[RawArtist] | None = None
    album: RawPlaylist | None = None
    duration: int | None = None
    thumbnail_provider: RawThumbnailProvider | None = None
    related_browse_id: str | None = None
    lyrics_browse_id: str | None = None
    is_explicit: bool = False
    like_status: str | None = None
    set_id: str | None = None


@dataclass
class RawPlaylist:
    """Playlist or album record; ``playlist_type`` tells them apart."""

    id: str
    name: str | None = None
    playlist_type: RawPlaylistType | None = None
    artists: list[RawArtist] | None = None
    owner_id: str | None = None
    thumbnail_provider: RawThumbnailProvider | None = None
    item_count: int | None = None
    total_duration: int | None = None
    year: int | None = None
    description: str | None = None
    items: list[RawSong] | None = None
    continuation: str | None = None
    item_set_ids: list[str] | None = None


type RawItem = RawSong | RawPlaylist | RawArtist


@dataclass
class RawLayout:
    """A titled row of raw items.

    ``title`` is the display string, ``title_key`` the machine-readable one
    used for classification.
    """

    title: str | None = None
    title_key: str | None = None
    subtitle: str | None = None
    items: list[RawItem] = field(default_factory=list)
    view_more_browse_id: str | None = None
    view_more_params: str | None = None


@dataclass
class RawChip:
    """Filter chip shown above a feed."""

    text: str
    params: str


@dataclass
class RawFeed:
    """One page of a feed."""

    layouts: list[RawLayout] = field(default_factory=list)
    continuation: str | None = None
    chips: list[RawChip] = field(default_factory=list)


@dataclass
class RawVideo:
    """Player response: video details and stream data."""

    video_id: str
    title: str | None = None
    author: str | None = None
    channel_id: str | None = None
    view_count: int | None = None
    music_video_type: str | None = None
    description: str | None = None
    hls_manifest_url: str | None = None
    playback_url: str | None = None
    adaptive_formats: list[RawFormat] = field(default_factory=list)


@dataclass
class RawFormat:
    """Progressive/adaptive format of a player response."""

    url: str | None
    mime_type: str
    bitrate: int = 0


@dataclass
class RawAccount:
    """Account entry of the account switcher."""

    id: str
    name: str | None = None
    photo_url: str | None = None
    handle: str | None = None
    is_selected: bool = False


@dataclass
class RawLyricLine:
    """Lyrics line with its cue range when the lyrics are timed."""

    text: str
    start_ms: int | None = None
    end_ms: int | None = None


@dataclass
class RawLyrics:
    """Lyrics page: its lines and the source credit."""

    lines: list[RawLyricLine]
    source: str | None = None
