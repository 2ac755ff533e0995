"""Settings surface exposed to the host."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from music_assistant_models.config_entries import ConfigEntry, ConfigValueType
from music_assistant_models.enums import ConfigEntryType

from .constants import (
    CONF_HIGH_QUALITY,
    CONF_RESOLVE_MUSIC_FOR_VIDEOS,
    CONF_USE_MP4_FORMAT,
    CONF_VISITOR_ID,
)
from .models import ThumbnailQuality


class ConfigReader(Protocol):
    """Protocol for configuration readers."""

    def get_value(self, key: str) -> ConfigValueType:
        """Retrieve a configuration value by key."""
        ...


class ConfigStore(ConfigReader, Protocol):
    """Protocol for the host's settings storage."""

    def set_value(self, key: str, value: ConfigValueType) -> None:
        """Persist a configuration value."""
        ...


class ConfigDescriptor[T]:
    """Typed config descriptor with embedded ConfigEntry."""

    def __init__(self, cast: Callable[[ConfigValueType], T], config_entry: ConfigEntry) -> None:
        """Initialize descriptor.

        Args:
            cast: Transformation/validation applied to raw value.
            config_entry: ConfigEntry definition for this option.
        """
        self.cast = cast
        self.config_entry = config_entry

    @property
    def key(self) -> str:
        """Get the config key from the embedded ConfigEntry."""
        return self.config_entry.key

    def __get__(self, instance: ConfigReader | None, owner: type) -> T:
        """Descriptor access (the descriptor itself when accessed on the class)."""
        if instance is None:
            return self  # type: ignore[return-value]
        return self.cast(instance.get_value(self.key))


def as_bool(default: bool) -> Callable[[ConfigValueType], bool]:
    """Return a cast falling back to ``default`` for unset values."""

    def _cast(value: ConfigValueType) -> bool:
        return default if value is None else bool(value)

    return _cast


def as_str_or_none(value: ConfigValueType) -> str | None:
    """Cast to a non-empty string or None."""
    return str(value) if value else None


class YTMusicSettings(ConfigReader):
    """Typed access to the bridge settings."""

    high_quality = ConfigDescriptor(
        as_bool(False),
        ConfigEntry(
            key=CONF_HIGH_QUALITY,
            type=ConfigEntryType.BOOLEAN,
            label="High Thumbnail Quality",
            description="Use high quality thumbnails, will cause more data usage.",
            default_value=False,
            required=False,
        ),
    )
    use_mp4_format = ConfigDescriptor(
        as_bool(False),
        ConfigEntry(
            key=CONF_USE_MP4_FORMAT,
            type=ConfigEntryType.BOOLEAN,
            label="Use MP4 Format",
            description="Use MP4 formats for audio streams, "
            "will turn off video & allow you to download music.",
            default_value=False,
            required=False,
        ),
    )
    resolve_music_for_videos = ConfigDescriptor(
        as_bool(True),
        ConfigEntry(
            key=CONF_RESOLVE_MUSIC_FOR_VIDEOS,
            type=ConfigEntryType.BOOLEAN,
            label="Resolve Music for Videos",
            description="Resolve actual music metadata for music videos, "
            "does slow down loading music videos.",
            default_value=True,
            required=False,
        ),
    )
    visitor_id = ConfigDescriptor(
        as_str_or_none,
        ConfigEntry(
            key=CONF_VISITOR_ID,
            type=ConfigEntryType.STRING,
            label="Visitor id",
            hidden=True,
            required=False,
        ),
    )

    def __init__(self, store: ConfigStore) -> None:
        """Initialize with the host's settings storage."""
        self.store = store

    def get_value(self, key: str) -> ConfigValueType:
        """Get a raw config value."""
        return self.store.get_value(key)

    @property
    def thumbnail_quality(self) -> ThumbnailQuality:
        """Return the thumbnail quality tier selected by the user."""
        return ThumbnailQuality.HIGH if self.high_quality else ThumbnailQuality.LOW

    def save_visitor_id(self, visitor_id: str) -> None:
        """Persist the visitor id for later anonymous sessions."""
        self.store.set_value(CONF_VISITOR_ID, visitor_id)


def get_config_entries() -> tuple[ConfigEntry, ...]:
    """Return the configuration entries of the bridge."""
    return (
        YTMusicSettings.high_quality.config_entry,
        YTMusicSettings.use_mp4_format.config_entry,
        YTMusicSettings.resolve_music_for_videos.config_entry,
        YTMusicSettings.visitor_id.config_entry,
    )
