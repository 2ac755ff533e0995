"""YouTube Music bridge: normalized catalog access, playlist editing and stream resolution."""

from .config import get_config_entries
from .provider import YTMusicProvider

__all__ = ["YTMusicProvider", "get_config_entries"]
