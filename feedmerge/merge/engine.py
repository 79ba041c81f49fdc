"""Merge engine: normalize, deduplicate, rank and allocate."""

from typing import Dict, Iterable, List, Optional

import pendulum
from pydantic import BaseModel, Field

from ..models import Category, Collection, RawItem, Record
from ..normalize import normalize
from ..ranking import AllocationResult, QuotaAllocator, rank_by_recency
from .dedup import deduplicate


class MergeStats(BaseModel):
    """Counters for one merge pass."""

    raw_items: int = Field(0, description="Raw items received")
    normalized: int = Field(0, description="Records produced by normalization")
    skipped: int = Field(0, description="Raw items dropped as unusable")
    duplicates: int = Field(0, description="Records dropped by deduplication")
    reserved: int = Field(0, description="Privileged records reserved")
    selected: int = Field(0, description="Records in the final collection")
    by_category: Dict[str, int] = Field(default_factory=dict, description="Final count per category")


class MergeEngine:
    """Synchronous merge of raw items into a ranked, size-bounded collection."""

    def __init__(self, allocator: QuotaAllocator) -> None:
        self.allocator = allocator
        self.stats = MergeStats()

    def normalize_all(self, raw_items: Iterable[RawItem]) -> List[Record]:
        records = []
        for raw in raw_items:
            self.stats.raw_items += 1
            record = normalize(raw)
            if record is None:
                self.stats.skipped += 1
                continue
            records.append(record)
        self.stats.normalized = len(records)
        return records

    def select(self, records: List[Record]) -> AllocationResult:
        """Deduplicate, rank and allocate already-normalized records."""
        unique = deduplicate(records)
        self.stats.duplicates = len(records) - len(unique)
        result = self.allocator.allocate(rank_by_recency(unique))
        self.stats.reserved = result.reserved
        self.stats.selected = len(result.items)
        self.stats.by_category = {
            category.value: sum(1 for r in result.items if r.category == category)
            for category in Category
        }
        return result

    def merge(
        self,
        raw_items: Iterable[RawItem],
        generated_at: Optional[pendulum.DateTime] = None,
    ) -> Collection:
        """
        Build a collection from raw items in canonical source order.

        Args:
            raw_items: Raw items, concatenated in declared source order
            generated_at: Generation timestamp (default: now)

        Returns:
            Fresh collection; empty when nothing usable was found
        """
        self.stats = MergeStats()
        result = self.select(self.normalize_all(raw_items))
        return Collection(
            generated_at=generated_at or pendulum.now("UTC"),
            items=result.items,
        )
