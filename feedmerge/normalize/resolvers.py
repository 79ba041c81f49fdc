"""Field resolvers with explicit fallback chains.

Each resolver walks an ordered tuple of field names and returns the first
non-empty value, flattened to a plain string where the source may nest it
(e.g. an Atom link object, a guid with attributes, a feedparser content list).
"""

import calendar
import hashlib
import json
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Iterable, Mapping, Optional

import pendulum

from ..models import EPOCH

IDENTITY_FIELDS = ("id", "guid", "url", "link", "permalink", "title")
TITLE_FIELDS = ("title", "media_title", "dc_title")
LINK_FIELDS = ("link", "guid", "id")
DATE_FIELDS = ("published", "pubDate", "updated", "dc_date", "issued", "created")
BODY_FIELDS = ("description", "summary", "content_encoded", "content")
THUMBNAIL_FIELDS = ("media_thumbnail", "media_content", "enclosures", "enclosure")

# Keys tried, in order, when a field value is an object rather than a string
_TEXT_KEYS = ("href", "url", "_", "value")


def flatten(value: Any, keys: Iterable[str] = _TEXT_KEYS) -> str:
    """Reduce a nested field value to a flat string ("" when nothing usable)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return flatten(value[0], keys) if value else ""
    if isinstance(value, Mapping):
        for key in keys:
            text = flatten(value.get(key), keys)
            if text:
                return text
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def first_non_empty(
    data: Mapping[str, Any],
    fields: Iterable[str],
    keys: Iterable[str] = _TEXT_KEYS,
) -> str:
    """Return the first field in ``fields`` that flattens to a non-empty string."""
    keys = tuple(keys)
    for field in fields:
        text = flatten(data.get(field), keys)
        if text:
            return text
    return ""


def raw_hash(data: Mapping[str, Any]) -> str:
    """Deterministic hash of a raw item's full structure."""
    encoded = json.dumps(data, sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def resolve_identity(data: Mapping[str, Any]) -> str:
    """Identity key: explicit id, guid, url, link, permalink, title, then hash."""
    return first_non_empty(data, IDENTITY_FIELDS) or raw_hash(data)


def resolve_title(data: Mapping[str, Any]) -> str:
    return first_non_empty(data, TITLE_FIELDS, keys=("value", "_"))


def resolve_link(data: Mapping[str, Any]) -> str:
    return first_non_empty(data, LINK_FIELDS, keys=("href", "_", "url"))


def resolve_body(data: Mapping[str, Any]) -> str:
    for field in BODY_FIELDS:
        value = data.get(field)
        text = flatten(value, keys=("value", "_")) if not isinstance(value, str) else value
        if text:
            return text
    return ""


def resolve_thumbnail(data: Mapping[str, Any]) -> Optional[str]:
    return first_non_empty(data, THUMBNAIL_FIELDS, keys=("url", "href")) or None


def resolve_date_source(data: Mapping[str, Any]) -> Any:
    """First non-empty date value; a feedparser ``<field>_parsed`` wins over its string."""
    for field in DATE_FIELDS:
        parsed = data.get(f"{field}_parsed")
        if parsed:
            return parsed
        value = data.get(field)
        if isinstance(value, str):
            value = value.strip()
        if value:
            return value
    return None


def _parse_date_string(text: str) -> Optional[datetime]:
    """Parse a full ISO-8601 or RFC 822 date; partial or relative strings give None."""
    if not text or text.lower() == "now":
        return None
    try:
        parsed = pendulum.parse(text, strict=True, tz="UTC")
    except ValueError:
        parsed = None
    if isinstance(parsed, datetime):
        return parsed
    try:
        return parsedate_to_datetime(text)
    except (ValueError, TypeError, IndexError):
        return None


def normalize_timestamp(value: Any) -> datetime:
    """Convert a date source to a UTC instant, falling back to the epoch sentinel."""
    if not value:
        return EPOCH
    try:
        if isinstance(value, time.struct_time):
            return pendulum.from_timestamp(calendar.timegm(value), tz="UTC")
        if isinstance(value, str):
            value = _parse_date_string(value.strip())
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return pendulum.instance(value).in_timezone("UTC")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return pendulum.from_timestamp(value, tz="UTC")
    except (ValueError, TypeError, OverflowError, OSError):
        return EPOCH
    return EPOCH
