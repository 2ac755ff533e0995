"""Parsers turning raw catalog records into domain models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    EXTRA_ITEM_SET_IDS,
    EXTRA_LYRICS_ID,
    EXTRA_RELATED_ID,
    EXTRA_SET_ID,
    EXTRA_SUB_ID,
    LIKED_SONGS_ID,
    SINGLES,
    UNKNOWN,
)
from .helpers.thumbnails import resolve_cover, track_cover
from .models import Album, Artist, Playlist, Shelf, Track, User
from .raw import RawArtist, RawPlaylist, RawPlaylistType, RawSong

if TYPE_CHECKING:
    from .helpers.paging import PagedData
    from .models import MediaItem, ThumbnailQuality
    from .raw import RawItem, RawLayout


def parse_artist(raw: RawArtist, quality: ThumbnailQuality) -> Artist:
    """Parse a raw artist record."""
    extras = {}
    if raw.subscribe_params:
        extras[EXTRA_SUB_ID] = raw.subscribe_params
    return Artist(
        id=raw.id,
        name=raw.name or UNKNOWN,
        cover=resolve_cover(raw.thumbnail_provider, quality),
        description=raw.description,
        followers=raw.subscriber_count,
        extras=extras,
    )


def parse_user(raw: RawArtist, quality: ThumbnailQuality) -> User:
    """Parse a raw channel record as a user."""
    return User(
        id=raw.id,
        name=raw.name or UNKNOWN,
        cover=resolve_cover(raw.thumbnail_provider, quality),
    )


def user_to_artist(user: User) -> Artist:
    """Project a user onto the artist it represents."""
    return Artist(id=user.id, name=user.name, cover=user.cover, extras=dict(user.extras))


def parse_album(
    raw: RawPlaylist, quality: ThumbnailQuality, single: bool = False
) -> Album:
    """Parse an album-shaped raw record.

    Records of a "Singles" row default to one track when no count is known.
    """
    year = str(raw.year) if raw.year is not None else None
    item_count = raw.item_count
    if item_count is None and single:
        item_count = 1
    return Album(
        id=raw.id,
        title=raw.name or UNKNOWN,
        cover=resolve_cover(raw.thumbnail_provider, quality),
        artists=[parse_artist(artist, quality) for artist in raw.artists or []],
        tracks=item_count,
        release_date=year,
        duration=raw.total_duration,
        description=raw.description,
        subtitle=year,
    )


def parse_playlist(
    raw: RawPlaylist,
    quality: ThumbnailQuality,
    own_channel_id: str | None = None,
    related: str | None = None,
) -> Playlist:
    """Parse a playlist-shaped raw record.

    The playlist is editable only when its owner is the session's own channel.
    """
    extras = {}
    if related is not None:
        extras[EXTRA_RELATED_ID] = related
    if raw.item_set_ids:
        extras[EXTRA_ITEM_SET_IDS] = ",".join(raw.item_set_ids)
    year = str(raw.year) if raw.year is not None else None
    if raw.artists:
        subtitle = ", ".join(artist.name or UNKNOWN for artist in raw.artists)
    else:
        subtitle = year
    return Playlist(
        id=raw.id,
        title=raw.name or UNKNOWN,
        is_editable=raw.owner_id is not None and raw.owner_id == own_channel_id,
        cover=resolve_cover(raw.thumbnail_provider, quality),
        authors=[parse_user(artist, quality) for artist in raw.artists or []],
        tracks=raw.item_count,
        duration=raw.total_duration,
        creation_date=year,
        description=raw.description,
        subtitle=subtitle,
        extras=extras,
    )


def parse_track(raw: RawSong, quality: ThumbnailQuality, set_id: str | None = None) -> Track:
    """Parse a raw song record.

    ``set_id`` identifies the playlist slot the track was loaded from.
    """
    album = parse_album(raw.album, quality) if raw.album else None
    extras = {}
    if raw.related_browse_id:
        extras[EXTRA_RELATED_ID] = raw.related_browse_id
    if raw.lyrics_browse_id:
        extras[EXTRA_LYRICS_ID] = raw.lyrics_browse_id
    if set_id := set_id or raw.set_id:
        extras[EXTRA_SET_ID] = set_id
    return Track(
        id=raw.id,
        title=raw.name or UNKNOWN,
        artists=[parse_artist(artist, quality) for artist in raw.artists or []],
        cover=resolve_cover(raw.thumbnail_provider, quality, crop=True)
        or track_cover(raw.id, quality),
        album=album,
        duration=raw.duration,
        release_date=album.release_date if album else None,
        is_explicit=raw.is_explicit,
        is_liked=raw.like_status == "LIKE",
        extras=extras,
    )


def parse_media_item(
    raw: RawItem,
    quality: ThumbnailQuality,
    own_channel_id: str | None = None,
    single: bool = False,
) -> MediaItem | None:
    """Parse any raw record, or return None when it cannot be presented."""
    match raw:
        case RawSong():
            return parse_track(raw, quality)
        case RawPlaylist(playlist_type=RawPlaylistType.ALBUM):
            return parse_album(raw, quality, single)
        case RawPlaylist():
            if raw.id == LIKED_SONGS_ID:
                return None
            return parse_playlist(raw, quality, own_channel_id)
        case RawArtist():
            return parse_artist(raw, quality)
    return None


def parse_media_items(
    raw_items: list[RawItem],
    quality: ThumbnailQuality,
    own_channel_id: str | None = None,
    single: bool = False,
) -> list[MediaItem]:
    """Parse a list of raw records, dropping the unrepresentable ones."""
    return [
        item
        for raw in raw_items
        if (item := parse_media_item(raw, quality, own_channel_id, single)) is not None
    ]


def is_singles_layout(layout: RawLayout) -> bool:
    """Return whether a row lists single-track releases.

    Only the machine-readable title is considered so the result does not
    depend on the display language.
    """
    return layout.title_key == SINGLES


def parse_shelf(
    layout: RawLayout,
    quality: ThumbnailQuality,
    own_channel_id: str | None = None,
    more: PagedData[MediaItem] | None = None,
) -> Shelf:
    """Parse a raw row into a shelf."""
    return Shelf(
        title=layout.title or UNKNOWN,
        subtitle=layout.subtitle,
        items=parse_media_items(
            layout.items, quality, own_channel_id, single=is_singles_layout(layout)
        ),
        more=more,
    )
