"""API Client for the YouTube Music innertube API."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from aiohttp import ClientResponseError, ContentTypeError

from .constants import (
    ACCOUNT_SWITCHER_URL,
    BASE_URL,
    CLIENT_NAME,
    CLIENT_VERSION,
    INNERTUBE_URL,
    LANGUAGE,
    ORIGIN,
    PLAYER_CLIENT_NAME,
    PLAYER_CLIENT_VERSION,
    PLAYER_USER_AGENT,
)
from .errors import InvalidDataError, MediaNotFoundError, ResourceTemporarilyUnavailable
from .helpers.json import JSON_DECODE_EXCEPTIONS
from .helpers.util import playback_nonce

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aiohttp import ClientResponse

    from .provider import YTMusicProvider
    from .session import AuthState

VISITOR_DATA_REGEX = re.compile(r'"VISITOR_DATA":"([^"]+)"')


class YTMusicAPIClient:
    """Client for interacting with the YouTube Music innertube API."""

    def __init__(self, provider: YTMusicProvider):
        """Initialize API client."""
        self.provider = provider
        self.session = provider.session
        self.logger = provider.logger
        self.http_session = provider.http_session
        self.visitor_id: str | None = None

    def _context(self, player: bool = False) -> dict[str, Any]:
        client: dict[str, Any] = {
            "clientName": PLAYER_CLIENT_NAME if player else CLIENT_NAME,
            "clientVersion": PLAYER_CLIENT_VERSION if player else CLIENT_VERSION,
            "hl": LANGUAGE.split("-")[0],
            "gl": LANGUAGE.split("-")[-1],
        }
        if self.visitor_id:
            client["visitorData"] = self.visitor_id
        if player:
            client["deviceModel"] = "iPhone16,2"
        return {"client": client, "user": {}}

    def _headers(self, auth: AuthState | None, player: bool = False) -> dict[str, str]:
        headers = {
            "Origin": ORIGIN,
            "Referer": f"{BASE_URL}/",
            "Accept-Language": LANGUAGE,
        }
        if self.visitor_id:
            headers["X-Goog-Visitor-Id"] = self.visitor_id
        if player:
            headers["User-Agent"] = PLAYER_USER_AGENT
        if auth is not None:
            headers.update(auth.headers)
        return headers

    async def post(
        self,
        endpoint: str,
        data: dict[str, Any] | None = None,
        auth: AuthState | None = None,
        player: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send an innertube request.

        Without an explicit ``auth`` the request uses the current session,
        if any, so anonymous and personalised feeds share one code path.
        """
        if auth is None:
            auth = self.session.auth
        body = {"context": self._context(player), **(data or {})}
        params = {"prettyPrint": "false", **kwargs.pop("params", {})}
        self.logger.debug("Making request to innertube endpoint: %s", endpoint)
        async with self.http_session.post(
            f"{INNERTUBE_URL}/{endpoint}",
            json=body,
            params=params,
            headers=self._headers(auth, player),
            **kwargs,
        ) as response:
            return await self._handle_response(response)

    async def get_text(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        """Fetch a raw text body (manifests, web pages)."""
        self.logger.debug("Fetching %s", url)
        async with self.http_session.get(url, headers=dict(headers or {})) as response:
            await self._check_status(response)
            return await response.text()

    async def _check_status(self, response: ClientResponse) -> None:
        """Map HTTP error statuses onto the error taxonomy."""
        if response.status in (401, 403):
            # the session layer reclassifies these
            raise ClientResponseError(
                response.request_info,
                response.history,
                status=response.status,
                message=response.reason or "",
                headers=response.headers,
            )
        if response.status == 404:
            raise MediaNotFoundError(f"Item not found: {response.url}")
        if response.status >= 400:
            text = await response.text()
            self.logger.error("API error: %s - %s", response.status, text)
            raise ResourceTemporarilyUnavailable("API error")

    async def _handle_response(self, response: ClientResponse) -> dict[str, Any]:
        """Handle API response and common error conditions."""
        await self._check_status(response)
        try:
            if response.status == 204 or response.content_length == 0:
                return {}
            data = await response.json(content_type=None)
        except (*JSON_DECODE_EXCEPTIONS, ContentTypeError) as err:
            raise InvalidDataError("Failed to parse response") from err
        if not isinstance(data, dict):
            raise InvalidDataError("Unexpected response body")
        return data

    async def browse(
        self,
        browse_id: str | None = None,
        params: str | None = None,
        continuation: str | None = None,
        auth: AuthState | None = None,
    ) -> dict[str, Any]:
        """Browse a page, or continue one."""
        data: dict[str, Any] = {}
        if browse_id is not None:
            data["browseId"] = browse_id
        if params is not None:
            data["params"] = params
        return await self.post("browse", data, auth, params=_continuation_params(continuation))

    async def search(
        self, query: str, params: str | None = None, continuation: str | None = None
    ) -> dict[str, Any]:
        """Search the catalog, optionally restricted by a filter."""
        data: dict[str, Any] = {"query": query}
        if params is not None:
            data["params"] = params
        return await self.post("search", data, params=_continuation_params(continuation))

    async def next(
        self,
        video_id: str | None = None,
        playlist_id: str | None = None,
        params: str | None = None,
        continuation: str | None = None,
    ) -> dict[str, Any]:
        """Load a watch queue (song page or radio)."""
        data: dict[str, Any] = {"enablePersistentPlaylistPanel": True, "isAudioOnly": True}
        if video_id is not None:
            data["videoId"] = video_id
        if playlist_id is not None:
            data["playlistId"] = playlist_id
        if params is not None:
            data["params"] = params
        if continuation is not None:
            data["continuation"] = continuation
        return await self.post("next", data)

    async def player(self, video_id: str, auth: AuthState | None = None) -> dict[str, Any]:
        """Load the player response (stream data) of a video."""
        return await self.post(
            "player", {"videoId": video_id, "contentCheckOk": True}, auth, player=True
        )

    async def get_lyrics(self, browse_id: str) -> dict[str, Any]:
        """Browse a lyrics page with the mobile client, which also serves timed lyrics."""
        return await self.post("browse", {"browseId": browse_id}, player=True)

    async def track_playback(self, url: str, auth: AuthState) -> None:
        """Report a playback through the tracking url of a player response."""
        params = {"ver": "2", "c": CLIENT_NAME, "cpn": playback_nonce()}
        self.logger.debug("Reporting playback to %s", url)
        async with self.http_session.get(
            url, params=params, headers=self._headers(auth)
        ) as response:
            await self._check_status(response)

    async def get_search_suggestions(self, query: str) -> dict[str, Any]:
        """Fetch search suggestions, including history entries when logged in."""
        return await self.post("music/get_search_suggestions", {"input": query})

    async def feedback(self, tokens: list[str], auth: AuthState) -> dict[str, Any]:
        """Send feedback tokens (e.g. removing a search history entry)."""
        return await self.post("feedback", {"feedbackTokens": tokens}, auth)

    async def edit_playlist(
        self, playlist_id: str, actions: list[dict[str, Any]], auth: AuthState
    ) -> dict[str, Any]:
        """Apply edit actions to a playlist in one request."""
        return await self.post(
            "browse/edit_playlist", {"playlistId": playlist_id, "actions": actions}, auth
        )

    async def create_playlist(
        self, title: str, description: str | None, auth: AuthState
    ) -> dict[str, Any]:
        """Create a private playlist."""
        return await self.post(
            "playlist/create",
            {"title": title, "description": description or "", "privacyStatus": "PRIVATE"},
            auth,
        )

    async def delete_playlist(self, playlist_id: str, auth: AuthState) -> dict[str, Any]:
        """Delete a playlist."""
        return await self.post("playlist/delete", {"playlistId": playlist_id}, auth)

    async def rate_song(self, video_id: str, liked: bool, auth: AuthState) -> dict[str, Any]:
        """Like a song, or remove the like."""
        endpoint = "like/like" if liked else "like/removelike"
        return await self.post(endpoint, {"target": {"videoId": video_id}}, auth)

    async def set_subscribed(
        self, channel_id: str, params: str, subscribed: bool, auth: AuthState
    ) -> dict[str, Any]:
        """Subscribe to or unsubscribe from a channel."""
        endpoint = "subscription/subscribe" if subscribed else "subscription/unsubscribe"
        return await self.post(endpoint, {"channelIds": [channel_id], "params": params}, auth)

    async def get_account_switcher(self, headers: Mapping[str, str]) -> str:
        """Fetch the raw account switcher body for the given credentials."""
        return await self.get_text(
            ACCOUNT_SWITCHER_URL, {**headers, "Origin": ORIGIN, "Referer": f"{BASE_URL}/"}
        )

    async def fetch_visitor_id(self) -> str:
        """Fetch a fresh visitor id from the web client."""
        html = await self.get_text(BASE_URL, {"Accept-Language": LANGUAGE})
        if match := VISITOR_DATA_REGEX.search(html):
            return match.group(1)
        raise InvalidDataError("Could not find visitor id")


def _continuation_params(continuation: str | None) -> dict[str, str]:
    if continuation is None:
        return {}
    return {"ctoken": continuation, "continuation": continuation, "type": "next"}
