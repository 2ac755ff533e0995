"""Domain models exposed to the host application."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from mashumaro import DataClassDictMixin
from music_assistant_models.enums import StreamType

if TYPE_CHECKING:
    from .helpers.paging import PagedData


class ThumbnailQuality(StrEnum):
    """Thumbnail size tier, chosen once per session."""

    LOW = "low"
    HIGH = "high"


class StreamableType(StrEnum):
    """Kind of media a streamable carries."""

    AUDIO = "audio"
    VIDEO = "video"


@dataclass
class CoverImage(DataClassDictMixin):
    """Reference to a remotely accessible image."""

    url: str
    crop: bool = False


@dataclass
class Artist(DataClassDictMixin):
    """An artist as shown to the host."""

    id: str
    name: str
    cover: CoverImage | None = None
    description: str | None = None
    followers: int | None = None
    extras: dict[str, str] = field(default_factory=dict)


@dataclass
class User(DataClassDictMixin):
    """A channel seen from the perspective of a session."""

    id: str
    name: str
    cover: CoverImage | None = None
    extras: dict[str, str] = field(default_factory=dict)


@dataclass
class Album(DataClassDictMixin):
    """An album (ordered, read-only container of tracks)."""

    id: str
    title: str
    cover: CoverImage | None = None
    artists: list[Artist] = field(default_factory=list)
    tracks: int | None = None
    release_date: str | None = None
    publisher: str | None = None
    duration: int | None = None
    description: str | None = None
    subtitle: str | None = None
    extras: dict[str, str] = field(default_factory=dict)


@dataclass
class Streamable(DataClassDictMixin):
    """A playable variant of a track."""

    url: str
    quality: int
    media_type: StreamableType = StreamableType.AUDIO
    stream_type: StreamType = StreamType.HTTP


@dataclass
class Track(DataClassDictMixin):
    """A single playable item.

    ``extras`` carries service continuation ids: ``relatedId``, ``lyricsId``
    and, for playlist entries, the ``setId`` of the slot the track occupies.
    """

    id: str
    title: str
    artists: list[Artist] = field(default_factory=list)
    cover: CoverImage | None = None
    album: Album | None = None
    duration: int | None = None
    release_date: str | None = None
    plays: int | None = None
    description: str | None = None
    is_explicit: bool = False
    is_liked: bool = False
    streamables: list[Streamable] = field(default_factory=list)
    extras: dict[str, str] = field(default_factory=dict)


@dataclass
class Playlist(DataClassDictMixin):
    """A playlist, editable when owned by the session's own channel."""

    id: str
    title: str
    is_editable: bool = False
    cover: CoverImage | None = None
    authors: list[User] = field(default_factory=list)
    tracks: int | None = None
    duration: int | None = None
    creation_date: str | None = None
    description: str | None = None
    subtitle: str | None = None
    extras: dict[str, str] = field(default_factory=dict)


@dataclass
class Lyric(DataClassDictMixin):
    """A single lyrics line, timed when the source provides timing."""

    text: str
    start_ms: int | None = None
    end_ms: int | None = None


@dataclass
class Lyrics(DataClassDictMixin):
    """Lyrics of a track."""

    id: str
    title: str
    source: str | None = None
    lines: list[Lyric] = field(default_factory=list)


@dataclass
class Radio(DataClassDictMixin):
    """A generated radio station seeded by a track or artist."""

    id: str
    title: str
    tracks: list[Track] = field(default_factory=list)
    continuation: str | None = None


type MediaItem = Track | Album | Playlist | Artist | User


@dataclass
class Shelf:
    """A titled row of media items, optionally with more items behind it."""

    title: str
    items: list[MediaItem] = field(default_factory=list)
    subtitle: str | None = None
    more: PagedData[MediaItem] | None = None


@dataclass
class Tab:
    """A selectable tab of a feed."""

    id: str
    title: str


@dataclass
class QuickSearchItem:
    """A search suggestion."""

    query: str
    from_history: bool = False
