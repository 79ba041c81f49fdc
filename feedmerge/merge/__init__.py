"""Merge engine and deduplication."""

from .dedup import deduplicate
from .engine import MergeEngine, MergeStats

__all__ = ["MergeEngine", "MergeStats", "deduplicate"]
