"""Identity-based deduplication."""

from typing import Iterable, List

from ..models import Record


def deduplicate(records: Iterable[Record]) -> List[Record]:
    """Keep the first record seen for each identity, preserving input order."""
    seen = set()
    unique = []
    for record in records:
        if record.identity in seen:
            continue
        seen.add(record.identity)
        unique.append(record)
    return unique
