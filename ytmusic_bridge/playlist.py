"""Playlist management for YouTube Music."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .constants import EXTRA_SET_ID, LIBRARY_PLAYLISTS_ID, LIKED_SONGS_ID, PLAYLIST_BROWSE_PREFIX
from .errors import InvalidDataError
from .parsers import parse_playlist
from .raw import RawPlaylist, RawPlaylistType
from .renderers import decode_edit_results, decode_library_page

if TYPE_CHECKING:
    from .models import Playlist, Track
    from .provider import YTMusicProvider
    from .session import AuthState


@dataclass(frozen=True)
class AddAction:
    """Append a track at the tail of the playlist."""

    track_id: str

    def as_dict(self) -> dict[str, Any]:
        """Return the wire form of the action."""
        return {"action": "ACTION_ADD_VIDEO", "addedVideoId": self.track_id}


@dataclass(frozen=True)
class RemoveAction:
    """Remove the entry occupying a slot."""

    track_id: str
    set_id: str

    def as_dict(self) -> dict[str, Any]:
        """Return the wire form of the action."""
        return {
            "action": "ACTION_REMOVE_VIDEO",
            "removedVideoId": self.track_id,
            "setVideoId": self.set_id,
        }


@dataclass(frozen=True)
class MoveAction:
    """Move a slot to immediately precede the anchor slot."""

    set_id: str
    before_set_id: str

    def as_dict(self) -> dict[str, Any]:
        """Return the wire form of the action."""
        return {
            "action": "ACTION_MOVE_VIDEO_BEFORE",
            "setVideoId": self.set_id,
            "movedSetVideoIdSuccessor": self.before_set_id,
        }


type EditAction = AddAction | RemoveAction | MoveAction


def edit_id(playlist_id: str) -> str:
    """Return the id the edit endpoints expect (without the browse prefix)."""
    return playlist_id.removeprefix(PLAYLIST_BROWSE_PREFIX)


def set_id_of(track: Track) -> str:
    """Return the slot id a track was loaded with."""
    if not (set_id := track.extras.get(EXTRA_SET_ID)):
        raise InvalidDataError(f"Track {track.id} was not loaded from a playlist")
    return set_id


def track_at(tracks: list[Track], index: int) -> Track:
    """Return the track at an index of the snapshot; negative indexes are rejected."""
    if not 0 <= index < len(tracks):
        raise InvalidDataError(f"Index {index} is out of range for {len(tracks)} tracks")
    return tracks[index]


def move_anchor_index(from_index: int, to_index: int) -> int:
    """Return the pre-move index of the slot the mover must precede.

    Moving backward the mover takes the place of the item at ``to_index``;
    moving forward that item shifts up, so the anchor is the one after it.
    """
    return to_index if from_index > to_index else to_index + 1


class YTMusicPlaylistManager:
    """Manages YouTube Music playlist operations.

    Index based edits are translated into the service's add, remove and
    move-before-anchor primitives. Every request goes through the session's
    auth guard; a failure mid-batch is not rolled back.
    """

    def __init__(self, provider: YTMusicProvider):
        """Initialize playlist manager."""
        self.provider = provider
        self.api = provider.api
        self.session = provider.session
        self.logger = provider.logger

    async def _apply(self, playlist: Playlist, actions: list[EditAction]) -> list[str]:
        """Send a batch of actions and return the set ids minted for added tracks."""
        if not actions:
            return []
        self.logger.debug("Applying %s edit action(s) to playlist %s", len(actions), playlist.id)

        async def _edit(auth: AuthState) -> dict[str, Any]:
            return await self.api.edit_playlist(
                edit_id(playlist.id), [action.as_dict() for action in actions], auth
            )

        return decode_edit_results(await self.session.with_auth(_edit))

    async def remove_tracks(
        self, playlist: Playlist, tracks: list[Track], indexes: list[int]
    ) -> None:
        """Remove the tracks at the given indexes of one consistent snapshot."""
        removed = [track_at(tracks, index) for index in indexes]
        actions: list[EditAction] = [RemoveAction(track.id, set_id_of(track)) for track in removed]
        await self._apply(playlist, actions)

    async def add_tracks(
        self, playlist: Playlist, tracks: list[Track], index: int, new_tracks: list[Track]
    ) -> None:
        """Insert new tracks as a contiguous block before ``index``.

        The service appends added tracks, so for an in-bounds index each new
        slot is then moved before the slot currently at that index.
        """
        anchor = set_id_of(tracks[index]) if 0 <= index < len(tracks) else None
        set_ids = await self._apply(playlist, [AddAction(track.id) for track in new_tracks])
        if anchor is None:
            return
        await self._apply(playlist, [MoveAction(set_id, anchor) for set_id in set_ids])

    async def move_track(
        self, playlist: Playlist, tracks: list[Track], from_index: int, to_index: int
    ) -> None:
        """Move one track from ``from_index`` to ``to_index``."""
        track = track_at(tracks, from_index)
        if to_index < 0:
            raise InvalidDataError(f"Index {to_index} is out of range for {len(tracks)} tracks")
        set_id = set_id_of(track)
        anchor_index = move_anchor_index(from_index, to_index)
        if not 0 <= anchor_index < len(tracks):
            # no move-to-end primitive exists
            self.logger.info(
                "Skipping move of %s to the end of playlist %s: not supported by the service",
                track.id,
                playlist.id,
            )
            return
        await self._apply(playlist, [MoveAction(set_id, set_id_of(tracks[anchor_index]))])

    async def create(self, title: str, description: str | None = None) -> Playlist:
        """Create a new playlist and return it loaded."""

        async def _create(auth: AuthState) -> dict[str, Any]:
            return await self.api.create_playlist(title, description, auth)

        result = await self.session.with_auth(_create)
        if not (playlist_id := result.get("playlistId")):
            raise InvalidDataError("Playlist creation returned no id")
        stub = parse_playlist(
            RawPlaylist(
                id=f"{PLAYLIST_BROWSE_PREFIX}{playlist_id}",
                name=title,
                playlist_type=RawPlaylistType.PLAYLIST,
            ),
            self.session.thumbnail_quality,
        )
        return await self.provider.media.load_playlist(stub)

    async def delete(self, playlist: Playlist) -> None:
        """Delete a playlist."""

        async def _delete(auth: AuthState) -> None:
            await self.api.delete_playlist(edit_id(playlist.id), auth)

        await self.session.with_auth(_delete)

    async def edit_metadata(
        self, playlist: Playlist, title: str, description: str | None = None
    ) -> None:
        """Rename a playlist and optionally replace its description."""
        actions: list[dict[str, Any]] = [
            {"action": "ACTION_SET_PLAYLIST_NAME", "playlistName": title}
        ]
        if description is not None:
            actions.append(
                {"action": "ACTION_SET_PLAYLIST_DESCRIPTION", "playlistDescription": description}
            )

        async def _edit(auth: AuthState) -> None:
            await self.api.edit_playlist(edit_id(playlist.id), actions, auth)

        await self.session.with_auth(_edit)

    async def list_editable(self) -> list[Playlist]:
        """List the account's playlists, without the liked songs container."""
        quality = self.session.thumbnail_quality

        async def _list(auth: AuthState) -> list[Playlist]:
            playlists: list[Playlist] = []
            continuation = None
            while True:
                response = await self.api.browse(
                    None if continuation else LIBRARY_PLAYLISTS_ID,
                    continuation=continuation,
                    auth=auth,
                )
                items, continuation = decode_library_page(response)
                playlists.extend(
                    parse_playlist(item, quality, auth.own_channel_id)
                    for item in items
                    if isinstance(item, RawPlaylist)
                    and item.playlist_type == RawPlaylistType.PLAYLIST
                    and item.id != LIKED_SONGS_ID
                )
                if continuation is None:
                    return playlists

        return await self.session.with_auth(_list)
