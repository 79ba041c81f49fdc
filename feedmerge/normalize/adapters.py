"""Format-specific adapters producing Records from raw items."""

from typing import Any, Mapping, Optional

from ..models import ArticleRaw, Category, PodcastRaw, RawItem, Record, VideoRaw
from .resolvers import (
    first_non_empty,
    normalize_timestamp,
    resolve_body,
    resolve_date_source,
    resolve_identity,
    resolve_link,
    resolve_thumbnail,
    resolve_title,
)

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_VIDEO_KIND = "youtube#video"
THUMBNAIL_SIZES = ("high", "medium", "default")


def normalize_feed_entry(raw: RawItem) -> Optional[Record]:
    """Normalize an RSS/Atom entry (article or podcast)."""
    data = raw.data
    title = resolve_title(data)
    link = resolve_link(data)
    if not title and not link and not first_non_empty(data, ("id", "guid")):
        return None

    return Record(
        identity=resolve_identity(data),
        category=raw.kind,
        origin=raw.origin,
        title=title,
        url=link,
        timestamp=normalize_timestamp(resolve_date_source(data)),
        body=resolve_body(data),
        thumbnail=resolve_thumbnail(data),
        region=raw.region,
    )


def _video_thumbnail(thumbnails: Any) -> Optional[str]:
    if not isinstance(thumbnails, Mapping):
        return None
    for size in THUMBNAIL_SIZES:
        entry = thumbnails.get(size)
        if not isinstance(entry, Mapping):
            continue
        url = entry.get("url")
        if isinstance(url, str) and url.strip():
            return url.strip()
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def normalize_video_item(raw: VideoRaw) -> Optional[Record]:
    """Normalize a YouTube search result; non-video or malformed results are skipped."""
    item_id = raw.data.get("id")
    if not isinstance(item_id, Mapping) or item_id.get("kind") != YOUTUBE_VIDEO_KIND:
        return None
    video_id = item_id.get("videoId")
    if not isinstance(video_id, str) or not video_id.strip():
        return None
    video_id = video_id.strip()

    snippet = raw.data.get("snippet")
    if not isinstance(snippet, Mapping):
        snippet = {}
    return Record(
        identity=video_id,
        category=Category.VIDEO,
        origin=_text(snippet.get("channelTitle")) or raw.origin or "YouTube",
        title=_text(snippet.get("title")),
        url=YOUTUBE_WATCH_URL.format(video_id=video_id),
        timestamp=normalize_timestamp(snippet.get("publishedAt")),
        body=_text(snippet.get("description")),
        thumbnail=_video_thumbnail(snippet.get("thumbnails")),
        region=raw.region,
    )


_ADAPTERS = {
    ArticleRaw: normalize_feed_entry,
    PodcastRaw: normalize_feed_entry,
    VideoRaw: normalize_video_item,
}


def normalize(raw: RawItem) -> Optional[Record]:
    """Produce one Record from a raw item, or None when it is unusable."""
    adapter = _ADAPTERS.get(type(raw))
    if adapter is None:
        return None
    return adapter(raw)
