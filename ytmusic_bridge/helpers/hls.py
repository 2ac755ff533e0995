"""HLS master playlist scanning for audio renditions and video variants."""

from __future__ import annotations

import re

from music_assistant_models.enums import StreamType

from ytmusic_bridge.models import Streamable, StreamableType

AUDIO_RENDITION_REGEX = re.compile(
    r'#EXT-X-MEDIA:URI="([^"]*)",TYPE=AUDIO,GROUP-ID="([^"]*)",NAME'
)
VIDEO_VARIANT_REGEX = re.compile(r"#EXT-X-STREAM-INF:.*,RESOLUTION=\d+x(\d+),.*\r?\n(.*)")


def _numeric_tag(value: str) -> int:
    """Return the numeric part of a group id (0 when there is none)."""
    digits = "".join(char for char in value if char.isdigit())
    return int(digits) if digits else 0


def parse_hls_streams(manifest: str, is_music: bool) -> list[Streamable]:
    """Extract the audio and video variants declared by a master playlist.

    Audio renditions come first, in declaration order. Video variants are
    dropped entirely for music assets.
    """
    audio = [
        Streamable(
            url=match.group(1),
            quality=_numeric_tag(match.group(2)),
            media_type=StreamableType.AUDIO,
            stream_type=StreamType.HLS,
        )
        for match in AUDIO_RENDITION_REGEX.finditer(manifest)
    ]
    if is_music:
        return audio
    video = [
        Streamable(
            url=match.group(2).strip(),
            quality=int(match.group(1)),
            media_type=StreamableType.VIDEO,
            stream_type=StreamType.HLS,
        )
        for match in VIDEO_VARIANT_REGEX.finditer(manifest)
    ]
    return audio + video
