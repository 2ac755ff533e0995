"""Test catalog browsing: feeds, search, loads, shelves and radio."""

import json
import pathlib
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest
from aiohttp import ClientError

from ytmusic_bridge.constants import (
    ALL_TAB_ID,
    EXTRA_ITEM_SET_IDS,
    EXTRA_LYRICS_ID,
    EXTRA_RELATED_ID,
    EXTRA_SET_ID,
)
from ytmusic_bridge.errors import InvalidDataError, LoginRequired, MediaNotFoundError
from ytmusic_bridge.media import YTMusicMediaManager
from ytmusic_bridge.models import (
    Album,
    Artist,
    Playlist,
    QuickSearchItem,
    Tab,
    ThumbnailQuality,
    Track,
)
from ytmusic_bridge.session import SessionContext

Loader = Callable[[str], dict[str, Any]]

FIXTURES_DIR = pathlib.Path(__file__).parent / "fixtures"

SEARCH_RESPONSE = json.loads((FIXTURES_DIR / "search.json").read_text())

SUGGESTIONS_RESPONSE = {
    "contents": [
        {
            "searchSuggestionsSectionRenderer": {
                "contents": [
                    {
                        "historySuggestionRenderer": {
                            "suggestion": {"runs": [{"text": "old query"}]},
                            "serviceEndpoint": {"feedbackEndpoint": {"feedbackToken": "tok"}},
                        }
                    },
                    {
                        "searchSuggestionRenderer": {
                            "suggestion": {"runs": [{"text": "old queries"}]}
                        }
                    },
                ]
            }
        }
    ]
}


@pytest.fixture
def media_manager(provider_mock: Mock) -> YTMusicMediaManager:
    """Return a media manager."""
    return YTMusicMediaManager(provider_mock)


async def test_load_playlist(
    media_manager: YTMusicMediaManager,
    provider_mock: Mock,
    logged_in_session: SessionContext,
    load_fixture: Loader,
) -> None:
    """Test loading an own playlist caches its track list."""
    provider_mock.api.browse.side_effect = [
        load_fixture("playlist_page.json"),
        load_fixture("playlist_continuation.json"),
    ]

    playlist = await media_manager.load_playlist(Playlist(id="VLPL1", title="Road Trip"))

    assert playlist.is_editable is True
    assert playlist.tracks == 3
    assert playlist.duration == 720_000
    assert playlist.extras[EXTRA_RELATED_ID] == "related-cursor"
    assert playlist.extras[EXTRA_ITEM_SET_IDS] == "set1,set2,set3"

    tracks = await media_manager.load_tracks(playlist).load_all()

    assert [track.id for track in tracks] == ["vid1", "vid2", "vid3", "vid4"]
    assert [track.extras[EXTRA_SET_ID] for track in tracks] == ["set1", "set2", "set3", "set4"]
    assert provider_mock.api.browse.await_args_list[1].kwargs == {"continuation": "tracks-page-2"}


async def test_load_tracks_replays_pages(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test the cached track list does not refetch loaded pages."""
    provider_mock.api.browse.side_effect = [
        load_fixture("playlist_page.json"),
        load_fixture("playlist_continuation.json"),
    ]
    playlist = await media_manager.load_playlist(Playlist(id="VLPL1", title="Road Trip"))

    first = await media_manager.load_tracks(playlist).load_all()
    second = await media_manager.load_tracks(playlist).load_all()

    assert first == second
    assert provider_mock.api.browse.await_count == 2


async def test_load_tracks_keep_quality_of_load(
    media_manager: YTMusicMediaManager,
    provider_mock: Mock,
    session: SessionContext,
    load_fixture: Loader,
) -> None:
    """Test later pages use the thumbnail tier the container was loaded with."""
    provider_mock.api.browse.side_effect = [
        load_fixture("playlist_page.json"),
        load_fixture("playlist_continuation.json"),
    ]
    playlist = await media_manager.load_playlist(Playlist(id="VLPL1", title="Road Trip"))

    session.start(ThumbnailQuality.HIGH)
    tracks = await media_manager.load_tracks(playlist).load_all()

    assert tracks[-1].id == "vid4"
    assert tracks[-1].cover is not None
    assert tracks[-1].cover.url == "https://img.youtube.com/vi/vid4/mqdefault.jpg"


def test_quality_follows_session(
    media_manager: YTMusicMediaManager, session: SessionContext
) -> None:
    """Test the tier is read from the session, not from the settings."""
    session.start(ThumbnailQuality.HIGH)

    assert media_manager.quality == ThumbnailQuality.HIGH


async def test_load_tracks_not_loaded(media_manager: YTMusicMediaManager) -> None:
    """Test tracks of a container that was never loaded."""
    with pytest.raises(MediaNotFoundError):
        media_manager.load_tracks(Album(id="MPREb_unknown", title="Unknown"))


async def test_load_album_tracks_inherit_album(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test album rows without their own album reference the loaded album."""
    provider_mock.api.browse.return_value = load_fixture("playlist_page.json")

    album = await media_manager.load_album(Album(id="MPREb_trip", title="Road Trip"))
    page = await media_manager.load_tracks(album).load_first()

    assert album.title == "Road Trip"
    assert album.tracks == 3
    assert page.items[0].album is not None
    assert page.items[0].album.id == "MPREb_debut"
    assert page.items[1].album is not None
    assert page.items[1].album.id == "MPREb_trip"
    assert page.continuation == "tracks-page-2"


async def test_home_feed(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test the home feed rows and their "view more" sources."""
    provider_mock.api.browse.return_value = load_fixture("home_feed.json")

    page = await media_manager.get_home_feed().load_first()

    assert page.continuation == "home-page-2"
    singles, picks = page.items
    assert singles.title == "Singles"
    assert [item.id for item in singles.items] == ["MPREb_single"]
    assert isinstance(singles.items[0], Album)
    assert singles.items[0].tracks == 1
    assert isinstance(picks.items[0], Track)
    assert isinstance(picks.items[1], Artist)
    assert picks.more is None
    assert singles.more is not None

    more = await singles.more.load_all()

    provider_mock.api.browse.assert_awaited_with("FEmusic_new_releases", "more-params")
    assert isinstance(more[0], Album)
    assert more[0].tracks == 1


async def test_home_feed_continuation(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test continuing the home feed and filtering it by a chip."""
    provider_mock.api.browse.return_value = load_fixture("home_feed.json")
    feed = media_manager.get_home_feed(Tab(id="relax-params", title="Relax"))

    await feed.load_first()
    await feed.load_page("home-page-2")

    assert provider_mock.api.browse.await_args_list[0].args == ("FEmusic_home", "relax-params")
    assert provider_mock.api.browse.await_args_list[1].kwargs == {"continuation": "home-page-2"}


async def test_home_tabs(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test the home chips become tabs."""
    provider_mock.api.browse.return_value = load_fixture("home_feed.json")

    assert await media_manager.get_home_tabs() == [Tab(id="relax-params", title="Relax")]


async def test_search_reuses_last_result(
    media_manager: YTMusicMediaManager, provider_mock: Mock
) -> None:
    """Test the All tab of the last query does not search again."""
    provider_mock.api.search.return_value = SEARCH_RESPONSE

    tabs = await media_manager.search_tabs("hit")
    shelves = await media_manager.search_feed("hit", tabs[0]).load_all()

    assert tabs == [Tab(id=ALL_TAB_ID, title=ALL_TAB_ID), Tab(id="songs-filter", title="Songs")]
    assert [shelf.title for shelf in shelves] == ["Songs"]
    assert [item.id for item in shelves[0].items] == ["hit"]
    provider_mock.api.search.assert_awaited_once_with("hit")


async def test_search_other_query(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test another query searches again."""
    provider_mock.api.search.return_value = SEARCH_RESPONSE

    await media_manager.search_tabs("hit")
    await media_manager.search_feed("miss").load_all()

    assert provider_mock.api.search.await_count == 2


async def test_search_filtered(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test a filter tab pages through one shelf."""
    provider_mock.api.search.return_value = SEARCH_RESPONSE

    tab = Tab(id="songs-filter", title="Songs")

    page = await media_manager.search_feed("hit", tab).load_first()

    provider_mock.api.search.assert_awaited_once_with("hit", "songs-filter", None)
    assert page.items[0].title == "Songs"
    assert [item.id for item in page.items[0].items] == ["hit"]
    assert page.continuation is None


async def test_search_without_query(
    media_manager: YTMusicMediaManager, provider_mock: Mock
) -> None:
    """Test an empty search has no results."""
    assert await media_manager.search_feed(None).load_all() == []

    provider_mock.api.search.assert_not_called()


async def test_quick_search(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test suggestions keep their history flag."""
    provider_mock.api.get_search_suggestions.return_value = SUGGESTIONS_RESPONSE

    assert await media_manager.quick_search("old") == [
        QuickSearchItem(query="old query", from_history=True),
        QuickSearchItem(query="old queries", from_history=False),
    ]


async def test_quick_search_failure(
    media_manager: YTMusicMediaManager, provider_mock: Mock
) -> None:
    """Test a failed suggestion request yields no suggestions."""
    provider_mock.api.get_search_suggestions.side_effect = ClientError("offline")

    assert await media_manager.quick_search("old") == []
    assert await media_manager.quick_search("") == []


async def test_delete_search_history(
    media_manager: YTMusicMediaManager, provider_mock: Mock, logged_in_session: SessionContext
) -> None:
    """Test the feedback token of the history entry is sent."""
    provider_mock.api.get_search_suggestions.return_value = SUGGESTIONS_RESPONSE

    await media_manager.delete_search_history(QuickSearchItem(query="old query", from_history=True))

    provider_mock.api.feedback.assert_awaited_once_with(["tok"], logged_in_session.auth)


async def test_delete_search_history_anonymous(media_manager: YTMusicMediaManager) -> None:
    """Test search history needs a login."""
    with pytest.raises(LoginRequired):
        await media_manager.delete_search_history(QuickSearchItem(query="old query"))


async def test_radio_for_track(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test a track radio and its continuation."""
    provider_mock.api.next.return_value = load_fixture("watch_next.json")
    track = Track(id="vid1", title="First Song")

    radio = await media_manager.radio_for_track(track)
    await media_manager.radio_for_track(track, radio)

    assert radio.title == "First Song Radio"
    assert [item.id for item in radio.tracks] == ["vid1", "vid2"]
    assert radio.continuation == "radio-cont"
    assert provider_mock.api.next.await_args_list[0].kwargs == {
        "video_id": "vid1",
        "playlist_id": "RDAMVMvid1",
        "params": "wAEB",
        "continuation": None,
    }
    assert provider_mock.api.next.await_args_list[1].kwargs["continuation"] == "radio-cont"
    assert await media_manager.load_radio_tracks(radio).load_all() == radio.tracks


async def test_radio_for_empty_playlist(
    media_manager: YTMusicMediaManager, provider_mock: Mock
) -> None:
    """Test a radio cannot be seeded by an empty playlist."""
    provider_mock.api.browse.return_value = {}

    with pytest.raises(MediaNotFoundError, match="No tracks found"):
        await media_manager.radio_for_playlist(Playlist(id="VLPL_empty", title="Empty"))


async def test_radio_for_album_seeds_last_track(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test an album radio is seeded by its last track."""
    provider_mock.api.browse.side_effect = [
        load_fixture("playlist_page.json"),
        load_fixture("playlist_continuation.json"),
    ]
    provider_mock.api.next.return_value = load_fixture("watch_next.json")

    radio = await media_manager.radio_for_album(Album(id="MPREb_trip", title="Road Trip"))

    assert radio.id == "radio_vid4"
    assert provider_mock.api.next.await_args.kwargs["video_id"] == "vid4"


async def test_radio_for_artist_without_radio(
    media_manager: YTMusicMediaManager, provider_mock: Mock
) -> None:
    """Test artists without a radio."""
    provider_mock.api.browse.return_value = {}

    with pytest.raises(MediaNotFoundError):
        await media_manager.radio_for_artist(Artist(id="UC_band", name="Band"))


async def test_track_shelves_without_related(media_manager: YTMusicMediaManager) -> None:
    """Test a track without a related page."""
    with pytest.raises(MediaNotFoundError):
        await media_manager.get_track_shelves(Track(id="vid1", title="First Song")).load_all()


async def test_playlist_shelves_from_cursor(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test related rows loaded from a page cursor."""
    provider_mock.api.browse.return_value = load_fixture("home_feed.json")
    playlist = Playlist(id="VLPL1", title="Road Trip", extras={EXTRA_RELATED_ID: "related-cursor"})

    shelves = await media_manager.get_playlist_shelves(playlist).load_all()

    assert [shelf.title for shelf in shelves] == ["Singles", "Quick picks"]
    provider_mock.api.browse.assert_awaited_once_with(continuation="related-cursor")


async def test_playlist_shelves_from_track(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test related rows redirected to the rows of a track."""
    provider_mock.streaming.load_track = AsyncMock(
        return_value=Track(
            id="vid1", title="First Song", extras={EXTRA_RELATED_ID: "MPTRt_related"}
        )
    )
    provider_mock.api.browse.return_value = load_fixture("home_feed.json")
    playlist = Playlist(id="VLPL1", title="Road Trip", extras={EXTRA_RELATED_ID: "id://vid1"})

    shelves = await media_manager.get_playlist_shelves(playlist).load_all()

    assert len(shelves) == 2
    assert provider_mock.streaming.load_track.await_args.args[0].id == "vid1"
    provider_mock.api.browse.assert_awaited_once_with("MPTRt_related")


async def test_playlist_shelves_without_related(media_manager: YTMusicMediaManager) -> None:
    """Test a playlist without a related id."""
    with pytest.raises(InvalidDataError):
        await media_manager.get_playlist_shelves(Playlist(id="VLPL1", title="Road Trip")).load_all()


async def test_lyrics_plain(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test plain lyrics become untimed lines."""
    provider_mock.api.get_lyrics.return_value = {
        "contents": {
            "sectionListRenderer": {
                "contents": [
                    {
                        "musicDescriptionShelfRenderer": {
                            "description": {"runs": [{"text": "line one\nline two"}]},
                            "footer": {"runs": [{"text": "Source: LyricFind"}]},
                        }
                    }
                ]
            }
        }
    }
    track = Track(id="vid1", title="First Song", extras={EXTRA_LYRICS_ID: "MPLYt_lyrics"})

    lyrics = await media_manager.search_track_lyrics(track).load_all()

    assert len(lyrics) == 1
    assert lyrics[0].source == "Source: LyricFind"
    assert [line.text for line in lyrics[0].lines] == ["line one", "line two"]
    assert all(line.start_ms is None for line in lyrics[0].lines)
    provider_mock.api.get_lyrics.assert_awaited_once_with("MPLYt_lyrics")


async def test_lyrics_timed(
    media_manager: YTMusicMediaManager, provider_mock: Mock, load_fixture: Loader
) -> None:
    """Test timed lyrics keep the cue range of every line."""
    provider_mock.api.get_lyrics.return_value = load_fixture("timed_lyrics.json")
    track = Track(id="vid1", title="First Song", extras={EXTRA_LYRICS_ID: "MPLYt_lyrics"})

    lyrics = await media_manager.search_track_lyrics(track).load_all()

    assert lyrics[0].id == "MPLYt_lyrics"
    assert lyrics[0].source == "Source: Musixmatch"
    assert [(line.text, line.start_ms, line.end_ms) for line in lyrics[0].lines] == [
        ("Drive all night", 1200, 4800),
        ("Till the morning light", 4800, 9100),
        ("", 9100, 9100),
    ]


async def test_lyrics_page_empty(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test a lyrics page without lyrics yields none."""
    provider_mock.api.get_lyrics.return_value = {}
    track = Track(id="vid1", title="First Song", extras={EXTRA_LYRICS_ID: "MPLYt_lyrics"})

    assert await media_manager.search_track_lyrics(track).load_all() == []


async def test_lyrics_without_id(media_manager: YTMusicMediaManager, provider_mock: Mock) -> None:
    """Test tracks without lyrics."""
    track = Track(id="vid1", title="First Song")

    lyrics = await media_manager.search_track_lyrics(track).load_all()

    assert lyrics == []
    provider_mock.api.get_lyrics.assert_not_called()
