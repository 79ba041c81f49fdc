"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Category, RawItem


class FetchResult(BaseModel):
    """Result of fetching one source (feed or video channel)."""

    source_name: str = Field(..., description="Source name or channel id")
    source_url: str = Field(..., description="Feed URL or channel id")
    category: Category = Field(..., description="Category of the fetched items")
    success: bool = Field(..., description="Whether fetch was successful")
    items: List[RawItem] = Field(default_factory=list, description="Raw items, in source order")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items fetched")
