"""Errors raised by the YouTube Music bridge."""

from __future__ import annotations

from music_assistant_models.errors import (
    InvalidDataError,
    LoginFailed,
    MediaNotFoundError,
    MusicAssistantError,
    ResourceTemporarilyUnavailable,
)

__all__ = [
    "InvalidDataError",
    "LoginFailed",
    "LoginRequired",
    "MediaNotFoundError",
    "MusicAssistantError",
    "ResourceTemporarilyUnavailable",
    "Unauthorized",
]


class LoginRequired(LoginFailed):
    """Error raised when an operation needs a session and none is set."""

    error_code = 1001

    def __init__(self, message: str = "Login required") -> None:
        """Initialize with a default message."""
        super().__init__(message)


class Unauthorized(LoginFailed):
    """Error raised when the server rejected the session of a known account."""

    error_code = 1002

    def __init__(self, user_id: str) -> None:
        """Initialize with the identity whose session was rejected."""
        super().__init__(f"Session of {user_id} is no longer authorized")
        self.user_id = user_id
