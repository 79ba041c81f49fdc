"""Snapshot persistence and the publish/retain/fail guard."""

from .guard import GuardDecision, Outcome, SnapshotGuard, Strictness, WriteAction
from .store import PriorSnapshot, SnapshotStore, atomic_write_text, parse_snapshot

__all__ = [
    "GuardDecision",
    "Outcome",
    "PriorSnapshot",
    "SnapshotGuard",
    "SnapshotStore",
    "Strictness",
    "WriteAction",
    "atomic_write_text",
    "parse_snapshot",
]
