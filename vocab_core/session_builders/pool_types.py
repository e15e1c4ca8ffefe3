"""
Typed pool models for practice selection.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Hashable, Literal, Optional


Bucket = Literal["due", "learning", "fresh", "mastered"]

# Draw weight per bucket: how many times an item enters the candidate pool
BUCKET_WEIGHTS: dict[str, int] = {
    "due": 4,
    "learning": 3,
    "fresh": 2,
    "mastered": 1,
}


@dataclass
class PoolState:
    """
    Items partitioned by memory-state bucket, in storage order.
    """
    due: list[Hashable] = field(default_factory=list)
    learning: list[Hashable] = field(default_factory=list)
    fresh: list[Hashable] = field(default_factory=list)
    mastered: list[Hashable] = field(default_factory=list)

    def add(self, item_id: Hashable, bucket: Bucket) -> None:
        getattr(self, bucket).append(item_id)

    def bucket_of(self, item_id: Hashable) -> Optional[Bucket]:
        for bucket in BUCKET_WEIGHTS:
            if item_id in getattr(self, bucket):
                return bucket
        return None

    def counts(self) -> dict[str, int]:
        return {bucket: len(getattr(self, bucket)) for bucket in BUCKET_WEIGHTS}

    def __len__(self) -> int:
        return sum(self.counts().values())
