"""Test the settings surface."""

from music_assistant_models.config_entries import ConfigValueType
from music_assistant_models.enums import ConfigEntryType

from ytmusic_bridge.config import YTMusicSettings, get_config_entries
from ytmusic_bridge.constants import (
    CONF_HIGH_QUALITY,
    CONF_RESOLVE_MUSIC_FOR_VIDEOS,
    CONF_USE_MP4_FORMAT,
    CONF_VISITOR_ID,
)
from ytmusic_bridge.models import ThumbnailQuality


class MemoryStore:
    """Config store backed by a dict."""

    def __init__(self, **values: ConfigValueType) -> None:
        """Initialize with preset values."""
        self.values = dict(values)

    def get_value(self, key: str) -> ConfigValueType:
        """Get a value."""
        return self.values.get(key)

    def set_value(self, key: str, value: ConfigValueType) -> None:
        """Set a value."""
        self.values[key] = value


def test_config_entries() -> None:
    """Test the entries exposed to the host."""
    entries = {entry.key: entry for entry in get_config_entries()}

    assert list(entries) == [
        CONF_HIGH_QUALITY,
        CONF_USE_MP4_FORMAT,
        CONF_RESOLVE_MUSIC_FOR_VIDEOS,
        CONF_VISITOR_ID,
    ]
    assert entries[CONF_HIGH_QUALITY].type == ConfigEntryType.BOOLEAN
    assert entries[CONF_RESOLVE_MUSIC_FOR_VIDEOS].default_value is True
    assert entries[CONF_VISITOR_ID].hidden is True


def test_defaults() -> None:
    """Test unset values fall back to their defaults."""
    settings = YTMusicSettings(MemoryStore())

    assert settings.high_quality is False
    assert settings.use_mp4_format is False
    assert settings.resolve_music_for_videos is True
    assert settings.visitor_id is None
    assert settings.thumbnail_quality == ThumbnailQuality.LOW


def test_stored_values() -> None:
    """Test values read from the store."""
    settings = YTMusicSettings(
        MemoryStore(
            **{
                CONF_HIGH_QUALITY: True,
                CONF_RESOLVE_MUSIC_FOR_VIDEOS: False,
                CONF_VISITOR_ID: "",
            }
        )
    )

    assert settings.thumbnail_quality == ThumbnailQuality.HIGH
    assert settings.resolve_music_for_videos is False
    assert settings.visitor_id is None


def test_save_visitor_id() -> None:
    """Test the visitor id is persisted."""
    store = MemoryStore()
    settings = YTMusicSettings(store)

    settings.save_visitor_id("Cgt2aXNpdG9y")

    assert store.values[CONF_VISITOR_ID] == "Cgt2aXNpdG9y"
    assert settings.visitor_id == "Cgt2aXNpdG9y"
