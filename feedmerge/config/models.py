"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models import DEFAULT_REGION, Category
from ..snapshot import Strictness

FEED_CATEGORIES = (Category.ARTICLE, Category.PODCAST)


class BuildConfig(BaseModel):
    """Merge and publish parameters."""

    max_items: int = Field(800, description="Cap on the published collection", ge=0)
    min_reserved: int = Field(100, description="Minimum slice for the privileged category", ge=0)
    privileged_category: Category = Field(Category.VIDEO, description="Category with a reserved slice")
    strictness_on_empty: Strictness = Field(
        Strictness.RETAIN_AND_SUCCEED,
        description="Policy when a build yields no records",
    )
    fill_from_all_categories: bool = Field(
        True,
        description="Let privileged records beyond the reservation compete for the remaining budget",
    )

    @model_validator(mode="after")
    def validate_reservation(self) -> "BuildConfig":
        """Validate that the reservation fits under the cap."""
        if self.min_reserved > self.max_items:
            raise ValueError(
                f"min_reserved ({self.min_reserved}) cannot exceed max_items ({self.max_items})"
            )
        return self


class FetchConfig(BaseModel):
    """Per-source fetch parameters."""

    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0)
    retries: int = Field(2, description="Retries after the first attempt", ge=0, le=10)
    backoff: float = Field(0.4, description="Base delay between retries in seconds", ge=0)
    max_concurrent: int = Field(5, description="Concurrent fetches", ge=1, le=100)
    user_agent: str = Field("feedmerge/1.0", description="User-Agent header")


class YouTubeConfig(BaseModel):
    """YouTube Data API parameters."""

    api_key_env: List[str] = Field(
        default_factory=lambda: ["YT_API_KEY", "GOOGLE_API_KEY"],
        description="Environment variables checked, in order, for the API key",
    )
    api_url: str = Field(
        "https://www.googleapis.com/youtube/v3/search",
        description="Search endpoint",
    )
    lookback_days: int = Field(90, description="Only videos published within this window", ge=1)
    max_results: int = Field(50, description="Results per channel", ge=1, le=50)


class ConfigModel(BaseModel):
    """Main configuration model."""

    sources_path: str = Field("sources.yaml", description="Article and podcast feed listing")
    channels_path: str = Field("youtube_channels.json", description="YouTube channel listing")
    output_path: str = Field("docs/feed.json", description="Published collection")
    stats_path: Optional[str] = Field(None, description="Optional run statistics JSON")
    build: BuildConfig = Field(default_factory=BuildConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    youtube: YouTubeConfig = Field(default_factory=YouTubeConfig)


class SourceConfig(BaseModel):
    """Feed source from sources.yaml."""

    name: str = Field(..., description="Source name")
    url: str = Field(..., description="RSS/Atom feed URL")
    category: Category = Field(Category.ARTICLE, description="Content category")
    region: str = Field(DEFAULT_REGION, description="Region tag")
    enabled: bool = Field(True, description="Whether source is enabled")

    @field_validator("category")
    @classmethod
    def validate_feed_category(cls, v: Category) -> Category:
        """Feeds carry articles or podcasts; videos come from channel queries."""
        if v not in FEED_CATEGORIES:
            raise ValueError(f"Unsupported feed category: {v.value}")
        return v


class SourcesListing(BaseModel):
    """Feed sources grouped by listing section."""

    articles: List[SourceConfig] = Field(default_factory=list)
    podcasts: List[SourceConfig] = Field(default_factory=list)

    @property
    def all(self) -> List[SourceConfig]:
        """Sources in canonical order: articles, then podcasts."""
        return self.articles + self.podcasts

    @property
    def enabled(self) -> List[SourceConfig]:
        return [s for s in self.all if s.enabled]
