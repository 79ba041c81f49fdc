"""Collection model: the published, ordered set of records."""

import json
from datetime import datetime
from typing import List

import pendulum
from pydantic import Field, field_serializer, model_validator

from .base import WireModel, format_instant
from .record import Record


class Collection(WireModel):
    """Ordered records plus generation metadata."""

    generated_at: datetime = Field(
        default_factory=lambda: pendulum.now("UTC"),
        alias="generatedAt",
        description="When the collection was built",
    )
    count: int = Field(0, description="Number of records")
    items: List[Record] = Field(default_factory=list, description="Ranked records")

    @model_validator(mode="after")
    def sync_count(self) -> "Collection":
        self.count = len(self.items)
        return self

    @field_serializer("generated_at")
    def serialize_generated_at(self, v: datetime) -> str:
        return format_instant(v)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_json(self) -> str:
        """Serialize to the published JSON layout."""
        payload = self.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
