"""Decoders for innertube (YouTube Music web client) responses.

Innertube wraps everything in renderer objects whose shape varies between
pages and client versions. These functions only pick out the fields the
bridge needs and return raw catalog records; anything unexpected is
skipped rather than raised.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .constants import LOGGER_NAME, TRACK_REDIRECT_PREFIX
from .helpers.util import (
    log_verbose,
    parse_count,
    parse_duration,
    parse_long_duration,
    parse_year,
)
from .raw import (
    RawAccount,
    RawArtist,
    RawChip,
    RawFeed,
    RawFormat,
    RawItem,
    RawLayout,
    RawLyricLine,
    RawLyrics,
    RawPlaylist,
    RawPlaylistType,
    RawSong,
    RawThumbnail,
    RawThumbnailProvider,
    RawVideo,
)

LOGGER = logging.getLogger(f"{LOGGER_NAME}.renderers")

PAGE_TYPE_ALBUM = "MUSIC_PAGE_TYPE_ALBUM"
PAGE_TYPE_PLAYLIST = "MUSIC_PAGE_TYPE_PLAYLIST"
PAGE_TYPE_ARTIST = "MUSIC_PAGE_TYPE_ARTIST"
PAGE_TYPE_LIBRARY_ARTIST = "MUSIC_PAGE_TYPE_LIBRARY_ARTIST"
PAGE_TYPE_USER_CHANNEL = "MUSIC_PAGE_TYPE_USER_CHANNEL"
ARTIST_PAGE_TYPES = (PAGE_TYPE_ARTIST, PAGE_TYPE_LIBRARY_ARTIST, PAGE_TYPE_USER_CHANNEL)
ALBUM_SUBTITLES = ("Album", "Single", "EP")
EXPLICIT_BADGE = "MUSIC_EXPLICIT_BADGE"
ITEM_COUNT_REGEX = re.compile(r"\d+ (song|track|video)")


def nav(obj: Any, *path: str | int, default: Any = None) -> Any:
    """Walk nested dicts/lists, returning ``default`` as soon as a step is missing."""
    for key in path:
        try:
            obj = obj[key]
        except (KeyError, IndexError, TypeError):
            return default
    return default if obj is None else obj


def text_of(obj: Any) -> str | None:
    """Return the plain text of a runs/simpleText object."""
    if not isinstance(obj, dict):
        return None
    if "simpleText" in obj:
        return str(obj["simpleText"])
    runs = obj.get("runs")
    if not runs:
        return None
    return "".join(run.get("text", "") for run in runs)


def runs_of(obj: Any) -> list[dict[str, Any]]:
    """Return the runs of a text object."""
    return list(nav(obj, "runs", default=[]))


def browse_endpoint(obj: Any) -> dict[str, Any] | None:
    """Return the browse endpoint of a run or renderer."""
    return nav(obj, "navigationEndpoint", "browseEndpoint")


def page_type(endpoint: dict[str, Any] | None) -> str | None:
    """Return the music page type a browse endpoint points at."""
    return nav(
        endpoint,
        "browseEndpointContextSupportedConfigs",
        "browseEndpointContextMusicConfig",
        "pageType",
    )


def continuation_of(obj: Any) -> str | None:
    """Return the continuation token of a list renderer, in any known envelope."""
    for key in ("nextContinuationData", "nextRadioContinuationData", "reloadContinuationData"):
        if token := nav(obj, "continuations", 0, key, "continuation"):
            return str(token)
    contents = nav(obj, "contents", default=[]) or nav(obj, "items", default=[])
    if contents and (
        token := nav(
            contents[-1],
            "continuationItemRenderer",
            "continuationEndpoint",
            "continuationCommand",
            "token",
        )
    ):
        return str(token)
    return None


def decode_thumbnails(obj: Any) -> RawThumbnailProvider | None:
    """Decode the thumbnail list of a renderer."""
    candidates = (
        nav(obj, "thumbnail", "musicThumbnailRenderer", "thumbnail", "thumbnails"),
        nav(obj, "thumbnailRenderer", "musicThumbnailRenderer", "thumbnail", "thumbnails"),
        nav(obj, "thumbnail", "croppedSquareThumbnailRenderer", "thumbnail", "thumbnails"),
        nav(obj, "thumbnail", "thumbnails"),
        nav(obj, "thumbnails"),
    )
    for thumbnails in candidates:
        if thumbnails:
            return RawThumbnailProvider(
                [
                    RawThumbnail(
                        url=item["url"], width=item.get("width"), height=item.get("height")
                    )
                    for item in thumbnails
                    if item.get("url")
                ]
            )
    return None


def decode_artist_runs(runs: list[dict[str, Any]]) -> list[RawArtist]:
    """Return the artists/channels linked from a list of runs."""
    artists = []
    for run in runs:
        endpoint = browse_endpoint(run)
        if endpoint and page_type(endpoint) in ARTIST_PAGE_TYPES:
            artists.append(RawArtist(id=endpoint["browseId"], name=run.get("text")))
    return artists


def decode_album_run(runs: list[dict[str, Any]]) -> RawPlaylist | None:
    """Return the album linked from a list of runs, if any."""
    for run in runs:
        endpoint = browse_endpoint(run)
        if endpoint and page_type(endpoint) == PAGE_TYPE_ALBUM:
            return RawPlaylist(
                id=endpoint["browseId"],
                name=run.get("text"),
                playlist_type=RawPlaylistType.ALBUM,
            )
    return None


def _item_count(texts: list[str]) -> int | None:
    return next((parse_count(text) for text in texts if ITEM_COUNT_REGEX.search(text)), None)


def _like_status(renderer: dict[str, Any]) -> str | None:
    for button in nav(renderer, "menu", "menuRenderer", "topLevelButtons", default=[]):
        if status := nav(button, "likeButtonRenderer", "likeStatus"):
            return str(status)
    return None


def _is_explicit(renderer: dict[str, Any]) -> bool:
    return any(
        nav(badge, "musicInlineBadgeRenderer", "icon", "iconType") == EXPLICIT_BADGE
        for badge in renderer.get("badges") or renderer.get("subtitleBadges") or []
    )


def _browse_item(
    browse_id: str,
    kind: str | None,
    name: str | None,
    subtitle_runs: list[dict[str, Any]],
    thumbnails: RawThumbnailProvider | None,
) -> RawItem | None:
    """Decode an item that navigates to a browse page."""
    subtitle_texts = [run.get("text", "") for run in subtitle_runs]
    if kind == PAGE_TYPE_ALBUM:
        return RawPlaylist(
            id=browse_id,
            name=name,
            playlist_type=RawPlaylistType.ALBUM,
            artists=decode_artist_runs(subtitle_runs) or None,
            thumbnail_provider=thumbnails,
            year=parse_year(subtitle_texts),
        )
    if kind == PAGE_TYPE_PLAYLIST:
        artists = decode_artist_runs(subtitle_runs)
        return RawPlaylist(
            id=browse_id,
            name=name,
            playlist_type=RawPlaylistType.PLAYLIST,
            artists=artists or None,
            owner_id=artists[0].id if artists else None,
            thumbnail_provider=thumbnails,
            item_count=_item_count(subtitle_texts),
        )
    if kind in ARTIST_PAGE_TYPES:
        return RawArtist(
            id=browse_id,
            name=name,
            thumbnail_provider=thumbnails,
            subscriber_count=next(
                (parse_count(text) for text in subtitle_texts if "subscriber" in text), None
            ),
        )
    return None


def decode_two_row_item(renderer: dict[str, Any]) -> RawItem | None:
    """Decode a ``musicTwoRowItemRenderer`` (grid and carousel cards)."""
    title_run = nav(renderer, "title", "runs", 0, default={})
    name = title_run.get("text")
    subtitle_runs = runs_of(renderer.get("subtitle"))
    thumbnails = decode_thumbnails(renderer)
    if video_id := nav(renderer, "navigationEndpoint", "watchEndpoint", "videoId"):
        return RawSong(
            id=video_id,
            name=name,
            artists=decode_artist_runs(subtitle_runs) or None,
            album=decode_album_run(subtitle_runs),
            thumbnail_provider=thumbnails,
            is_explicit=_is_explicit(renderer),
        )
    endpoint = browse_endpoint(renderer) or browse_endpoint(title_run)
    if not endpoint or "browseId" not in endpoint:
        return None
    return _browse_item(endpoint["browseId"], page_type(endpoint), name, subtitle_runs, thumbnails)


def decode_responsive_item(renderer: dict[str, Any]) -> RawItem | None:
    """Decode a ``musicResponsiveListItemRenderer`` (shelf rows, playlist entries)."""
    columns = [
        runs_of(nav(column, "musicResponsiveListItemFlexColumnRenderer", "text"))
        for column in renderer.get("flexColumns", [])
    ]
    if not columns or not columns[0]:
        return None
    title_run = columns[0][0]
    name = title_run.get("text")
    other_runs = [run for column in columns[1:] for run in column]
    thumbnails = decode_thumbnails(renderer)
    video_id = (
        nav(renderer, "playlistItemData", "videoId")
        or nav(title_run, "navigationEndpoint", "watchEndpoint", "videoId")
        or nav(
            renderer,
            "overlay",
            "musicItemThumbnailOverlayRenderer",
            "content",
            "musicPlayButtonRenderer",
            "playNavigationEndpoint",
            "watchEndpoint",
            "videoId",
        )
    )
    if video_id:
        duration_text = text_of(
            nav(renderer, "fixedColumns", 0, "musicResponsiveListItemFixedColumnRenderer", "text")
        )
        if duration_text is None:
            duration_text = next(
                (
                    run["text"]
                    for run in other_runs
                    if re.fullmatch(r"\d+(:\d{2})+", run.get("text", ""))
                ),
                None,
            )
        return RawSong(
            id=video_id,
            name=name,
            artists=decode_artist_runs(other_runs) or None,
            album=decode_album_run(other_runs),
            duration=parse_duration(duration_text),
            thumbnail_provider=thumbnails,
            is_explicit=_is_explicit(renderer),
            like_status=_like_status(renderer),
            set_id=nav(renderer, "playlistItemData", "playlistSetVideoId"),
        )
    endpoint = browse_endpoint(renderer) or browse_endpoint(title_run)
    if not endpoint or "browseId" not in endpoint:
        return None
    return _browse_item(endpoint["browseId"], page_type(endpoint), name, other_runs, thumbnails)


def decode_panel_video(renderer: dict[str, Any]) -> RawSong | None:
    """Decode a ``playlistPanelVideoRenderer`` (watch queue / radio entries)."""
    if "videoId" not in renderer:
        return None
    byline = runs_of(renderer.get("longBylineText"))
    return RawSong(
        id=renderer["videoId"],
        name=text_of(renderer.get("title")),
        artists=decode_artist_runs(byline) or None,
        album=decode_album_run(byline),
        duration=parse_duration(text_of(renderer.get("lengthText"))),
        thumbnail_provider=decode_thumbnails(renderer),
        is_explicit=_is_explicit(renderer),
    )


def decode_item(entry: dict[str, Any]) -> RawItem | None:
    """Decode any supported item renderer."""
    if renderer := entry.get("musicTwoRowItemRenderer"):
        return decode_two_row_item(renderer)
    if renderer := entry.get("musicResponsiveListItemRenderer"):
        return decode_responsive_item(renderer)
    if renderer := entry.get("playlistPanelVideoRenderer"):
        return decode_panel_video(renderer)
    if renderer := nav(entry, "playlistPanelVideoWrapperRenderer", "primaryRenderer"):
        return decode_item(renderer)
    if "continuationItemRenderer" not in entry:
        log_verbose(LOGGER, "Skipping unsupported item renderer %s", list(entry))
    return None


def decode_items(entries: list[dict[str, Any]]) -> list[RawItem]:
    """Decode a list of item renderers, dropping the unsupported ones."""
    return [item for entry in entries if (item := decode_item(entry)) is not None]


def decode_layout(section: dict[str, Any]) -> RawLayout | None:
    """Decode a section (carousel, shelf or grid) into a titled row."""
    if shelf := section.get("musicCarouselShelfRenderer"):
        header = nav(shelf, "header", "musicCarouselShelfBasicHeaderRenderer", default={})
        title = text_of(header.get("title"))
        more = nav(
            header, "moreContentButton", "buttonRenderer", "navigationEndpoint", "browseEndpoint"
        )
        more = more or browse_endpoint(nav(header, "title", "runs", 0))
        return RawLayout(
            title=title,
            title_key=_title_key(title),
            subtitle=text_of(header.get("strapline")),
            items=decode_items(shelf.get("contents", [])),
            view_more_browse_id=nav(more, "browseId"),
            view_more_params=nav(more, "params"),
        )
    if shelf := section.get("musicShelfRenderer") or section.get("musicPlaylistShelfRenderer"):
        title = text_of(shelf.get("title"))
        more = nav(shelf, "bottomEndpoint", "browseEndpoint")
        return RawLayout(
            title=title,
            title_key=_title_key(title),
            items=decode_items(shelf.get("contents", [])),
            view_more_browse_id=nav(more, "browseId"),
            view_more_params=nav(more, "params"),
        )
    if grid := section.get("gridRenderer"):
        title = text_of(nav(grid, "header", "gridHeaderRenderer", "title"))
        return RawLayout(
            title=title, title_key=_title_key(title), items=decode_items(grid.get("items", []))
        )
    log_verbose(LOGGER, "Skipping unsupported section renderer %s", list(section))
    return None


def _title_key(title: str | None) -> str | None:
    """Return the machine-readable title of a row.

    Every request asks for English, so the display title doubles as the key.
    """
    return title


def decode_layouts(sections: list[dict[str, Any]]) -> list[RawLayout]:
    """Decode a list of sections, dropping the unsupported ones."""
    return [layout for section in sections if (layout := decode_layout(section)) is not None]


def _section_list(response: dict[str, Any]) -> dict[str, Any]:
    """Return the section list of a browse/search response or continuation."""
    return (
        nav(response, "continuationContents", "sectionListContinuation")
        or nav(
            response,
            "contents",
            "singleColumnBrowseResultsRenderer",
            "tabs",
            0,
            "tabRenderer",
            "content",
            "sectionListRenderer",
        )
        or nav(
            response,
            "contents",
            "tabbedSearchResultsRenderer",
            "tabs",
            0,
            "tabRenderer",
            "content",
            "sectionListRenderer",
        )
        or nav(response, "contents", "sectionListRenderer")
        or {}
    )


def decode_chips(section_list: dict[str, Any]) -> list[RawChip]:
    """Decode the filter chips shown above a feed."""
    chips = []
    for chip in nav(section_list, "header", "chipCloudRenderer", "chips", default=[]):
        renderer = chip.get("chipCloudChipRenderer", {})
        params = nav(renderer, "navigationEndpoint", "browseEndpoint", "params") or nav(
            renderer, "navigationEndpoint", "searchEndpoint", "params"
        )
        text = text_of(renderer.get("text"))
        if params and text:
            chips.append(RawChip(text=text, params=params))
    return chips


def decode_feed(response: dict[str, Any]) -> RawFeed:
    """Decode one page of a sectioned feed (home, mood, related)."""
    section_list = _section_list(response)
    return RawFeed(
        layouts=decode_layouts(section_list.get("contents", [])),
        continuation=continuation_of(section_list),
        chips=decode_chips(section_list),
    )


def decode_search(
    response: dict[str, Any],
) -> tuple[list[tuple[RawLayout, RawChip | None]], list[RawChip]]:
    """Decode a search response into rows, each with the filter showing more of it."""
    section_list = _section_list(response)
    categories: list[tuple[RawLayout, RawChip | None]] = []
    for section in section_list.get("contents", []):
        if card := section.get("musicCardShelfRenderer"):
            title_run = nav(card, "title", "runs", 0, default={})
            top = decode_two_row_item(
                {
                    "title": {"runs": [title_run]},
                    "subtitle": card.get("subtitle"),
                    "navigationEndpoint": title_run.get("navigationEndpoint", {}),
                    "thumbnail": card.get("thumbnail"),
                }
            )
            items = [top] if top else []
            items += decode_items(card.get("contents", []))
            title = text_of(nav(card, "header", "musicCardShelfHeaderBasicRenderer", "title"))
            layout = RawLayout(title=title, title_key=_title_key(title), items=items)
            categories.append((layout, None))
            continue
        layout = decode_layout(section)
        if layout is None:
            continue
        params = nav(section, "musicShelfRenderer", "bottomEndpoint", "searchEndpoint", "params")
        chip = RawChip(text=layout.title or "", params=params) if params else None
        categories.append((layout, chip))
    return categories, decode_chips(section_list)


def decode_search_continuation(response: dict[str, Any]) -> tuple[list[RawItem], str | None]:
    """Decode a filtered search page (initial or continued)."""
    shelf = nav(response, "continuationContents", "musicShelfContinuation")
    if shelf is None:
        contents = _section_list(response).get("contents", [])
        shelf = next((s["musicShelfRenderer"] for s in contents if "musicShelfRenderer" in s), {})
    return decode_items(shelf.get("contents", [])), continuation_of(shelf)


def decode_library_page(response: dict[str, Any]) -> tuple[list[RawItem], str | None]:
    """Decode one page of a library listing."""
    container = (
        nav(response, "continuationContents", "gridContinuation")
        or nav(response, "continuationContents", "musicShelfContinuation")
    )
    if container is None:
        contents = _section_list(response).get("contents", [])
        for section in contents:
            container = (
                nav(section, "gridRenderer")
                or nav(section, "musicShelfRenderer")
                or nav(section, "itemSectionRenderer", "contents", 0, "gridRenderer")
            )
            if container:
                break
    if not container:
        return [], None
    entries = container.get("items") or container.get("contents") or []
    return decode_items(entries), continuation_of(container)


def decode_browse_items(response: dict[str, Any]) -> list[RawItem]:
    """Decode every item of every section of a "view more" page."""
    items: list[RawItem] = []
    for layout in decode_layouts(_section_list(response).get("contents", [])):
        items.extend(layout.items)
    return items


def _playlist_header(response: dict[str, Any]) -> tuple[dict[str, Any], bool]:
    """Return the header of a playlist/album page and whether it is the editable variant."""
    two_column = nav(response, "contents", "twoColumnBrowseResultsRenderer", default={})
    section = nav(
        two_column,
        "tabs",
        0,
        "tabRenderer",
        "content",
        "sectionListRenderer",
        "contents",
        0,
        default={},
    )
    if header := section.get("musicResponsiveHeaderRenderer"):
        return header, False
    if editable := section.get("musicEditablePlaylistDetailHeaderRenderer"):
        return nav(editable, "header", "musicResponsiveHeaderRenderer", default={}), True
    if editable := nav(response, "header", "musicEditablePlaylistDetailHeaderRenderer"):
        return nav(editable, "header", "musicDetailHeaderRenderer", default={}), True
    return nav(response, "header", "musicDetailHeaderRenderer", default={}), False


def _playlist_shelf(response: dict[str, Any]) -> dict[str, Any]:
    contents = nav(
        response,
        "contents",
        "twoColumnBrowseResultsRenderer",
        "secondaryContents",
        "sectionListRenderer",
        "contents",
        default=[],
    ) or _section_list(response).get("contents", [])
    for section in contents:
        if shelf := section.get("musicPlaylistShelfRenderer") or section.get("musicShelfRenderer"):
            return shelf
    return {}


def decode_playlist_page(
    response: dict[str, Any], browse_id: str, own_channel_id: str | None = None
) -> tuple[RawPlaylist, str | None]:
    """Decode an album/playlist page.

    Returns the record (with its first page of items and their set ids) and
    the related-content cursor. The editable header variant is only served
    to the owner, so its owner is the session's own channel.
    """
    header, editable = _playlist_header(response)
    subtitle_runs = runs_of(header.get("subtitle"))
    subtitle_texts = [run.get("text", "") for run in subtitle_runs]
    second_texts = [run.get("text", "") for run in runs_of(header.get("secondSubtitle"))]
    strapline = runs_of(header.get("straplineTextOne"))
    is_album = browse_id.startswith("MPRE") or (
        bool(subtitle_texts) and subtitle_texts[0] in ALBUM_SUBTITLES
    )
    artists = decode_artist_runs(strapline) or decode_artist_runs(subtitle_runs)
    owner_id = own_channel_id if editable else (artists[0].id if artists else None)
    shelf = _playlist_shelf(response)
    items = [item for item in decode_items(shelf.get("contents", [])) if isinstance(item, RawSong)]
    description = text_of(
        nav(header, "description", "musicDescriptionShelfRenderer", "description")
    ) or text_of(header.get("description"))
    playlist = RawPlaylist(
        id=browse_id,
        name=text_of(header.get("title")),
        playlist_type=RawPlaylistType.ALBUM if is_album else RawPlaylistType.PLAYLIST,
        artists=artists or None,
        owner_id=owner_id,
        thumbnail_provider=decode_thumbnails(header),
        item_count=_item_count(second_texts),
        total_duration=next(
            (parse_long_duration(text) for text in second_texts if parse_long_duration(text)), None
        ),
        year=parse_year(subtitle_texts),
        description=description,
        items=items,
        continuation=continuation_of(shelf),
        item_set_ids=[item.set_id for item in items if item.set_id] or None,
    )
    related = continuation_of(
        nav(
            response,
            "contents",
            "twoColumnBrowseResultsRenderer",
            "secondaryContents",
            "sectionListRenderer",
        )
    )
    if related is None and items:
        related = f"{TRACK_REDIRECT_PREFIX}{items[0].id}"
    return playlist, related


def decode_playlist_continuation(response: dict[str, Any]) -> tuple[list[RawSong], str | None]:
    """Decode a continued page of playlist/album entries."""
    if actions := response.get("onResponseReceivedActions"):
        entries = nav(actions, 0, "appendContinuationItemsAction", "continuationItems", default=[])
        container: dict[str, Any] = {"contents": entries}
    else:
        container = (
            nav(response, "continuationContents", "musicPlaylistShelfContinuation")
            or nav(response, "continuationContents", "musicShelfContinuation")
            or {}
        )
        entries = container.get("contents", [])
    items = [item for item in decode_items(entries) if isinstance(item, RawSong)]
    return items, continuation_of(container)


def decode_artist_page(
    response: dict[str, Any], browse_id: str
) -> tuple[RawArtist, list[RawLayout]]:
    """Decode an artist/channel page into its record and rows."""
    header = (
        nav(response, "header", "musicImmersiveHeaderRenderer")
        or nav(response, "header", "musicVisualHeaderRenderer")
        or nav(response, "header", "musicHeaderRenderer")
        or {}
    )
    subscribe = nav(header, "subscriptionButton", "subscribeButtonRenderer", default={})
    artist = RawArtist(
        id=subscribe.get("channelId") or browse_id,
        name=text_of(header.get("title")),
        thumbnail_provider=decode_thumbnails(header)
        or decode_thumbnails(header.get("foregroundThumbnail")),
        description=text_of(header.get("description")),
        subscriber_count=parse_count(text_of(subscribe.get("subscriberCountText"))),
        subscribe_params=nav(subscribe, "onSubscribeEndpoints", 0, "subscribeEndpoint", "params"),
        subscribed=subscribe.get("subscribed"),
        radio_playlist_id=nav(
            header,
            "startRadioButton",
            "buttonRenderer",
            "navigationEndpoint",
            "watchPlaylistEndpoint",
            "playlistId",
        ),
    )
    return artist, decode_layouts(_section_list(response).get("contents", []))


def decode_watch_next(
    response: dict[str, Any],
) -> tuple[list[RawSong], str | None, str | None, str | None]:
    """Decode a watch queue: songs, continuation, lyrics and related browse ids."""
    panel = nav(response, "continuationContents", "playlistPanelContinuation")
    lyrics_id = related_id = None
    if panel is None:
        tabs = nav(
            response,
            "contents",
            "singleColumnMusicWatchNextResultsRenderer",
            "tabbedRenderer",
            "watchNextTabbedResultsRenderer",
            "tabs",
            default=[],
        )
        panel = nav(
            tabs,
            0,
            "tabRenderer",
            "content",
            "musicQueueRenderer",
            "content",
            "playlistPanelRenderer",
            default={},
        )
        for tab in tabs[1:]:
            endpoint = nav(tab, "tabRenderer", "endpoint", "browseEndpoint")
            if not endpoint or nav(tab, "tabRenderer", "unselectable"):
                continue
            if page_type(endpoint) == "MUSIC_PAGE_TYPE_TRACK_LYRICS":
                lyrics_id = endpoint["browseId"]
            elif page_type(endpoint) == "MUSIC_PAGE_TYPE_TRACK_RELATED":
                related_id = endpoint["browseId"]
    songs = [item for item in decode_items(panel.get("contents", [])) if isinstance(item, RawSong)]
    if songs:
        songs[0].lyrics_browse_id = lyrics_id
        songs[0].related_browse_id = related_id
    return songs, continuation_of(panel), lyrics_id, related_id


def decode_player(response: dict[str, Any]) -> RawVideo:
    """Decode a player response."""
    details = response.get("videoDetails", {})
    streaming = response.get("streamingData", {})
    view_count = details.get("viewCount")
    return RawVideo(
        video_id=details.get("videoId", ""),
        title=details.get("title"),
        author=details.get("author"),
        channel_id=details.get("channelId"),
        view_count=int(view_count) if view_count and str(view_count).isdigit() else None,
        music_video_type=details.get("musicVideoType"),
        description=nav(response, "microformat", "microformatDataRenderer", "description")
        or details.get("shortDescription"),
        hls_manifest_url=streaming.get("hlsManifestUrl"),
        playback_url=nav(response, "playbackTracking", "videostatsPlaybackUrl", "baseUrl"),
        adaptive_formats=[
            RawFormat(
                url=fmt.get("url"),
                mime_type=fmt.get("mimeType", ""),
                bitrate=fmt.get("bitrate", 0),
            )
            for fmt in streaming.get("adaptiveFormats", [])
        ],
    )


def _millis(value: Any) -> int | None:
    return int(value) if value is not None and str(value).isdigit() else None


def decode_lyrics(response: dict[str, Any]) -> RawLyrics | None:
    """Decode a lyrics page.

    The mobile client serves timed lines with their cue ranges; otherwise the
    plain text shelf is split into untimed lines.
    """
    timed = nav(
        response,
        "contents",
        "elementRenderer",
        "newElement",
        "type",
        "componentType",
        "model",
        "timedLyricsModel",
        "lyricsData",
        default={},
    )
    if entries := timed.get("timedLyricsData"):
        lines = [
            RawLyricLine(
                text=entry.get("lyricLine", ""),
                start_ms=_millis(nav(entry, "cueRange", "startTimeMilliseconds")),
                end_ms=_millis(nav(entry, "cueRange", "endTimeMilliseconds")),
            )
            for entry in entries
        ]
        return RawLyrics(lines=lines, source=timed.get("sourceMessage"))
    shelf = nav(_section_list(response), "contents", 0, "musicDescriptionShelfRenderer")
    if not shelf or not (text := text_of(shelf.get("description"))):
        return None
    return RawLyrics(
        lines=[RawLyricLine(text=line) for line in text.splitlines()],
        source=text_of(shelf.get("footer")),
    )


def decode_search_suggestions(response: dict[str, Any]) -> list[tuple[str, bool, str | None]]:
    """Decode search suggestions into (query, from history, feedback token)."""
    suggestions = []
    for section in response.get("contents", []):
        for entry in nav(section, "searchSuggestionsSectionRenderer", "contents", default=[]):
            if renderer := entry.get("historySuggestionRenderer"):
                from_history = True
            elif renderer := entry.get("searchSuggestionRenderer"):
                from_history = False
            else:
                continue
            query = nav(renderer, "navigationEndpoint", "searchEndpoint", "query") or text_of(
                renderer.get("suggestion")
            )
            if not query:
                continue
            token = nav(renderer, "serviceEndpoint", "feedbackEndpoint", "feedbackToken")
            suggestions.append((query, from_history, token))
    return suggestions


def decode_edit_results(response: dict[str, Any]) -> list[str]:
    """Return the set ids minted for videos added by a playlist edit."""
    return [
        set_id
        for result in response.get("playlistEditResults", [])
        if (set_id := nav(result, "playlistEditVideoAddedResultData", "setVideoId"))
    ]


def decode_accounts(data: dict[str, Any]) -> list[RawAccount]:
    """Decode the account switcher payload."""
    accounts = []
    sections = nav(
        data,
        "data",
        "actions",
        0,
        "getMultiPageMenuAction",
        "menu",
        "multiPageMenuRenderer",
        "sections",
        default=[],
    )
    for section in sections:
        for group in nav(section, "accountSectionListRenderer", "contents", default=[]):
            for entry in nav(group, "accountItemSectionRenderer", "contents", default=[]):
                item = entry.get("accountItem")
                if not item:
                    continue
                tokens = nav(
                    item,
                    "serviceEndpoint",
                    "selectActiveIdentityEndpoint",
                    "supportedTokens",
                    default=[],
                )
                page_id = next(
                    (
                        nav(token, "pageIdToken", "pageId")
                        for token in tokens
                        if "pageIdToken" in token
                    ),
                    None,
                )
                accounts.append(
                    RawAccount(
                        id=page_id or "",
                        name=text_of(item.get("accountName")),
                        photo_url=nav(item, "accountPhoto", "thumbnails", 0, "url"),
                        handle=text_of(item.get("channelHandle")),
                        is_selected=bool(item.get("isSelected")),
                    )
                )
    return accounts
