"""Quota allocation: reserved slice for one category under a global cap."""

from typing import List, Sequence

from ..models import Category, Record
from .models import AllocationResult
from .ranker import rank_by_recency


class QuotaAllocator:
    """Reserve a minimum slice for a privileged category and fill by recency."""

    def __init__(
        self,
        max_items: int,
        min_reserved: int,
        privileged_category: Category = Category.VIDEO,
        fill_from_all_categories: bool = True,
    ) -> None:
        """
        Initialize quota allocator.

        Args:
            max_items: Cap on the final sequence length
            min_reserved: Minimum privileged records to include when available
            privileged_category: Category that gets the reserved slice
            fill_from_all_categories: Whether privileged records beyond the
                reservation compete for the remaining budget
        """
        if max_items < 0 or min_reserved < 0:
            raise ValueError("max_items and min_reserved must be non-negative")
        if min_reserved > max_items:
            raise ValueError(
                f"min_reserved ({min_reserved}) cannot exceed max_items ({max_items})"
            )
        self.max_items = max_items
        self.min_reserved = min_reserved
        self.privileged_category = privileged_category
        self.fill_from_all_categories = fill_from_all_categories

    def allocate(self, ranked: Sequence[Record]) -> AllocationResult:
        """
        Select the final records from a deduplicated, ranked pool.

        Args:
            ranked: Records ordered most-recent-first, unique by identity

        Returns:
            Allocation result with at most ``max_items`` records
        """
        privileged = [r for r in ranked if r.category == self.privileged_category]
        reserved = privileged[: min(self.min_reserved, len(privileged))]
        remaining = max(0, self.max_items - len(reserved))

        taken = {r.identity for r in reserved}
        filler: List[Record] = []
        for record in ranked:
            if len(filler) >= remaining:
                break
            if record.identity in taken:
                continue
            if (
                not self.fill_from_all_categories
                and record.category == self.privileged_category
            ):
                continue
            filler.append(record)

        items = rank_by_recency(reserved + filler)[: self.max_items]

        return AllocationResult(
            privileged_category=self.privileged_category,
            pool_size=len(ranked),
            privileged_available=len(privileged),
            reserved=len(reserved),
            filled=len(filler),
            items=items,
        )
