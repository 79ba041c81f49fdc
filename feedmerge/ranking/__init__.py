"""Recency ranking and quota allocation."""

from .models import AllocationResult
from .quota import QuotaAllocator
from .ranker import rank_by_recency, recency_key

__all__ = [
    "AllocationResult",
    "QuotaAllocator",
    "rank_by_recency",
    "recency_key",
]
