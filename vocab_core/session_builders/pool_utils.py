"""
Pool utilities for practice selection.

These helpers provide shared, minimal primitives for turning bucketed pools
into a randomized practice session.
"""

from __future__ import annotations
import random
from typing import Hashable, Iterable, Optional, TypeVar

from vocab_core.session_builders.pool_types import BUCKET_WEIGHTS, PoolState


T = TypeVar("T", bound=Hashable)


def build_weighted_pool(
    pool_state: PoolState,
    weights: Optional[dict[str, int]] = None
) -> list:
    """
    Repeat each item according to its bucket weight.
    """
    weights = BUCKET_WEIGHTS if weights is None else weights
    weighted: list = []
    for bucket, weight in weights.items():
        for item_id in getattr(pool_state, bucket):
            weighted.extend([item_id] * weight)
    return weighted


def shuffle_in_place(items: list, rng: Optional[random.Random] = None) -> list:
    """
    Uniform Fisher-Yates shuffle; returns the same list for chaining.
    """
    (rng or random).shuffle(items)
    return items


def take_distinct(items: Iterable[T], limit: int) -> list[T]:
    """
    First `limit` distinct items, keeping their order.
    """
    selected: list[T] = []
    if limit <= 0:
        return selected

    seen: set = set()
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        selected.append(item)
        if len(selected) >= limit:
            break
    return selected
