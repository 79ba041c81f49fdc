"""Recency ordering shared by the merge stages."""

from typing import Iterable, List

from ..models import Record


def recency_key(record: Record):
    """Sort key for most-recent-first ordering."""
    return record.timestamp


def rank_by_recency(records: Iterable[Record]) -> List[Record]:
    """Stable sort by timestamp, newest first; ties keep their input order."""
    return sorted(records, key=recency_key, reverse=True)
