"""Login handling for YouTube Music (cookie based web sessions)."""

from __future__ import annotations

import hashlib
import re
import time
from typing import TYPE_CHECKING

from .constants import (
    EXTRA_AUTH,
    EXTRA_COOKIE,
    LOGIN_INITIAL_URL,
    LOGIN_STOP_URL_REGEX,
    ORIGIN,
    XSSI_PREFIX,
)
from .errors import InvalidDataError, LoginFailed
from .helpers.json import JSON_DECODE_EXCEPTIONS, json_loads
from .models import CoverImage, User
from .renderers import decode_accounts
from .session import AuthState

if TYPE_CHECKING:
    from .provider import YTMusicProvider

SAPISID_REGEX = re.compile(r"(?:^|;)\s*SAPISID=([^;]+)")
STOP_URL_REGEX = re.compile(LOGIN_STOP_URL_REGEX)


def build_auth_header(cookie: str, now: int | None = None) -> str:
    """Compute the SAPISIDHASH authorization header of a cookie."""
    if not (match := SAPISID_REGEX.search(cookie)):
        raise LoginFailed("Login Failed, could not load SAPISID")
    timestamp = int(time.time()) if now is None else now
    digest = hashlib.sha1(f"{timestamp} {match.group(1)} {ORIGIN}".encode()).hexdigest()
    return f"SAPISIDHASH {timestamp}_{digest}"


def auth_headers(cookie: str, auth: str) -> dict[str, str]:
    """Return the credential headers of a session."""
    return {"Cookie": cookie, "Authorization": auth}


def parse_account_switcher(body: str, cookie: str = "", auth: str = "") -> list[User]:
    """Parse the account switcher body into users.

    Each user carries the credentials it was listed with, so it can be
    selected later.
    """
    try:
        data = json_loads(body.removeprefix(XSSI_PREFIX).strip())
    except JSON_DECODE_EXCEPTIONS as err:
        raise InvalidDataError("Failed to parse account switcher response") from err
    extras = {}
    if cookie:
        extras[EXTRA_COOKIE] = cookie
    if auth:
        extras[EXTRA_AUTH] = auth
    return [
        User(
            id=account.id,
            name=account.name or account.handle or "",
            cover=CoverImage(url=account.photo_url) if account.photo_url else None,
            extras=dict(extras),
        )
        for account in decode_accounts(data)
    ]


class YTMusicLoginManager:
    """Manages the login state of the session."""

    def __init__(self, provider: YTMusicProvider):
        """Initialize login manager."""
        self.provider = provider
        self.api = provider.api
        self.session = provider.session
        self.settings = provider.settings
        self.logger = provider.logger

    def get_login_webview(self) -> tuple[str, str]:
        """Return the url the login view opens and the pattern of the url it stops at."""
        return LOGIN_INITIAL_URL, LOGIN_STOP_URL_REGEX

    async def on_login_webview_stop(self, url: str, cookie: str) -> list[User]:
        """Return the accounts available for the cookie captured by the login view."""
        self.logger.debug("Login view stopped at %s", url)
        if not STOP_URL_REGEX.match(url):
            raise LoginFailed("Login Failed, login was not completed")
        auth = build_auth_header(cookie)
        body = await self.api.get_account_switcher(auth_headers(cookie, auth))
        return parse_account_switcher(body, cookie, auth)

    async def set_login_user(self, user: User | None) -> None:
        """Switch the session to a user, or to anonymous browsing."""
        if user is None:
            self.session.start(self.settings.thumbnail_quality)
            self.session.set_auth(None)
            await self.ensure_visitor_id()
            return
        if not (cookie := user.extras.get(EXTRA_COOKIE)):
            raise InvalidDataError("No cookie")
        if not (auth := user.extras.get(EXTRA_AUTH)):
            raise InvalidDataError("No auth")
        self.session.start(self.settings.thumbnail_quality)
        self.session.set_auth(AuthState(auth_headers(cookie, auth), user.id or None))

    async def ensure_visitor_id(self) -> str:
        """Use the stored visitor id, fetching and storing a new one when missing."""
        if not (visitor_id := self.settings.visitor_id):
            visitor_id = await self.api.fetch_visitor_id()
            self.settings.save_visitor_id(visitor_id)
            self.logger.debug("Stored new visitor id")
        self.api.visitor_id = visitor_id
        return visitor_id

    async def get_current_user(self) -> User | None:
        """Return the account of the session, or None when browsing anonymously."""
        if (state := self.session.auth) is None:
            return None
        users = parse_account_switcher(await self.api.get_account_switcher(state.headers))
        return users[0] if users else None
