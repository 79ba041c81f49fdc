"""Snapshot guard: publish, retain the prior collection, or fail."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..models import Collection
from .store import PriorSnapshot, SnapshotStore


class Strictness(str, Enum):
    """Policy applied when a build yields no records."""

    RETAIN_AND_SUCCEED = "retain-and-succeed"
    RETAIN_AND_FAIL = "retain-and-fail"
    WRITE_EMPTY_AND_SUCCEED = "write-empty-and-succeed"


class Outcome(str, Enum):
    PUBLISH = "publish"
    RETAIN = "retain"
    FAIL_EMPTY = "fail-empty"


class WriteAction(str, Enum):
    NEW = "new"
    PRIOR = "prior"
    EMPTY = "empty"
    NONE = "none"


class GuardDecision(BaseModel):
    """What to persist for a run and whether the run succeeded."""

    outcome: Outcome
    action: WriteAction
    success: bool
    count: int = Field(0, description="Records in the persisted collection")
    warning: Optional[str] = None


class SnapshotGuard:
    """Decide between the fresh build and the prior snapshot."""

    def __init__(self, strictness: Strictness = Strictness.RETAIN_AND_SUCCEED) -> None:
        self.strictness = Strictness(strictness)

    def decide(
        self,
        collection: Collection,
        prior: Optional[PriorSnapshot],
    ) -> GuardDecision:
        if not collection.is_empty:
            return GuardDecision(
                outcome=Outcome.PUBLISH,
                action=WriteAction.NEW,
                success=True,
                count=collection.count,
            )

        if prior is not None and not prior.is_empty:
            return GuardDecision(
                outcome=Outcome.RETAIN,
                action=WriteAction.PRIOR,
                success=self.strictness != Strictness.RETAIN_AND_FAIL,
                count=len(prior.items),
                warning=(
                    "Build produced no records; keeping previous collection "
                    f"({len(prior.items)} records)"
                ),
            )

        if self.strictness == Strictness.WRITE_EMPTY_AND_SUCCEED:
            return GuardDecision(
                outcome=Outcome.FAIL_EMPTY,
                action=WriteAction.EMPTY,
                success=True,
                warning="Build produced no records and no previous collection exists; writing empty collection",
            )

        return GuardDecision(
            outcome=Outcome.FAIL_EMPTY,
            action=WriteAction.NONE,
            success=False,
            warning="Build produced no records and no previous collection exists; nothing written",
        )

    def apply(
        self,
        collection: Collection,
        prior: Optional[PriorSnapshot],
        store: SnapshotStore,
    ) -> GuardDecision:
        """Decide and persist accordingly."""
        decision = self.decide(collection, prior)
        if decision.action == WriteAction.NEW:
            store.write(collection)
        elif decision.action == WriteAction.PRIOR:
            store.write_verbatim(prior)
        elif decision.action == WriteAction.EMPTY:
            store.write(collection)
        return decision
