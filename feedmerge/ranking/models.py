"""Ranking models."""

from typing import List

from pydantic import BaseModel, Field

from ..models import Category, Record


class AllocationResult(BaseModel):
    """Result of quota allocation over a ranked pool."""

    privileged_category: Category = Field(..., description="Category with a reserved slice")
    pool_size: int = Field(..., description="Records considered")
    privileged_available: int = Field(..., description="Privileged records in the pool")
    reserved: int = Field(..., description="Privileged records reserved")
    filled: int = Field(..., description="Records added from the general pool")
    items: List[Record] = Field(default_factory=list, description="Final ranked records")

    @property
    def privileged_included(self) -> int:
        return sum(1 for r in self.items if r.category == self.privileged_category)
