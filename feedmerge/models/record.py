"""Record model for normalized feed content."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from .base import EPOCH, WireModel, format_instant


class Category(str, Enum):
    """Closed set of content categories."""

    ARTICLE = "article"
    PODCAST = "podcast"
    VIDEO = "video"


DEFAULT_REGION = "GLOBAL"


class Record(WireModel):
    """One normalized content item."""

    identity: str = Field(..., alias="id", description="Deduplication key")
    category: Category = Field(..., alias="type", description="Content category")
    origin: str = Field("", alias="source", description="Name of the producing source")
    title: str = Field("", description="Trimmed display title")
    url: str = Field("", description="Canonical link")
    timestamp: datetime = Field(EPOCH, alias="date", description="Publication instant (UTC)")
    body: str = Field("", alias="description", description="Description or summary")
    thumbnail: Optional[str] = Field(None, alias="image", description="Image reference")
    region: str = Field(DEFAULT_REGION, description="Region tag")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return str(v or "").strip()

    @field_validator("origin", "url", "body", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("region", mode="before")
    @classmethod
    def default_region(cls, v):
        return v or DEFAULT_REGION

    @field_validator("timestamp")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("timestamp")
    def serialize_timestamp(self, v: datetime) -> str:
        return format_instant(v)
