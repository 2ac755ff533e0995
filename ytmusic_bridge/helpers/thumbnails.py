"""Thumbnail URL resolution."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ytmusic_bridge.constants import TRACK_THUMBNAIL_HIGH, TRACK_THUMBNAIL_LOW
from ytmusic_bridge.models import CoverImage, ThumbnailQuality

if TYPE_CHECKING:
    from ytmusic_bridge.raw import RawThumbnail, RawThumbnailProvider

# googleusercontent/ggpht urls accept a size suffix, e.g. "=w120-h120-l90-rj"
SIZE_SUFFIX_REGEX = re.compile(r"=w\d+-h\d+.*$")
TARGET_SIZE = {ThumbnailQuality.LOW: 226, ThumbnailQuality.HIGH: 544}


def _area(thumbnail: RawThumbnail) -> int:
    return (thumbnail.width or 0) * (thumbnail.height or 0)


def get_thumbnail_url(
    provider: RawThumbnailProvider | None, quality: ThumbnailQuality
) -> str | None:
    """Return the url of the variant matching the requested quality tier."""
    if provider is None or not provider.thumbnails:
        return None
    ordered = sorted(provider.thumbnails, key=_area)
    thumbnail = ordered[-1] if quality == ThumbnailQuality.HIGH else ordered[0]
    url = thumbnail.url
    if url.startswith("//"):
        url = f"https:{url}"
    if SIZE_SUFFIX_REGEX.search(url):
        size = TARGET_SIZE[quality]
        url = SIZE_SUFFIX_REGEX.sub(f"=w{size}-h{size}-l90-rj", url)
    return url


def resolve_cover(
    provider: RawThumbnailProvider | None, quality: ThumbnailQuality, crop: bool = False
) -> CoverImage | None:
    """Resolve a thumbnail descriptor into a cover image."""
    if url := get_thumbnail_url(provider, quality):
        return CoverImage(url=url, crop=crop)
    return None


def track_cover(track_id: str, quality: ThumbnailQuality) -> CoverImage:
    """Synthesize the predictable per-track thumbnail."""
    template = TRACK_THUMBNAIL_HIGH if quality == ThumbnailQuality.HIGH else TRACK_THUMBNAIL_LOW
    return CoverImage(url=template.format(track_id=track_id), crop=True)
