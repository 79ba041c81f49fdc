"""Raw item variants produced by the fetchers, before normalization."""

from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, Field

from .record import DEFAULT_REGION, Category


class _RawBase(BaseModel):
    origin: str = Field("", description="Source name")
    region: str = Field(DEFAULT_REGION, description="Region tag from the source listing")
    data: Dict[str, Any] = Field(default_factory=dict, description="Untouched source item")


class ArticleRaw(_RawBase):
    """Entry from an article feed (RSS/Atom)."""

    kind: Literal[Category.ARTICLE] = Category.ARTICLE


class PodcastRaw(_RawBase):
    """Entry from a podcast feed (RSS/Atom)."""

    kind: Literal[Category.PODCAST] = Category.PODCAST


class VideoRaw(_RawBase):
    """Item from a YouTube Data API search response."""

    kind: Literal[Category.VIDEO] = Category.VIDEO


RawItem = Union[ArticleRaw, PodcastRaw, VideoRaw]
