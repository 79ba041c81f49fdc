"""Record normalization: raw source items to the unified schema."""

from .adapters import normalize, normalize_feed_entry, normalize_video_item
from .resolvers import (
    normalize_timestamp,
    resolve_body,
    resolve_date_source,
    resolve_identity,
    resolve_link,
    resolve_thumbnail,
    resolve_title,
)

__all__ = [
    "normalize",
    "normalize_feed_entry",
    "normalize_video_item",
    "normalize_timestamp",
    "resolve_body",
    "resolve_date_source",
    "resolve_identity",
    "resolve_link",
    "resolve_thumbnail",
    "resolve_title",
]
