"""
Practice Builder - Weighted Session Creation

Chooses items for quizzes and games from four buckets:
1. Fresh: never reviewed (no state, or stability == 0)
2. Due: next_review has passed
3. Learning: 0 < stability <= 30 days
4. Mastered: everything else, including unreadable stored state

Session Logic:
- Each item enters a candidate pool once per bucket weight
  (Due x4, Learning x3, Fresh x2, Mastered x1)
- The pool is shuffled uniformly
- The first `limit` distinct items are taken in shuffled order
"""

from __future__ import annotations
import logging
import random
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Hashable, Iterable, Optional, Sequence

from vocab_core.config import DEFAULT_MASTERED_STABILITY, DEFAULT_PRACTICE_LIMIT
from vocab_core.errors import MalformedStateError
from vocab_core.fsrs.memory_state import MemoryState, StoredState, ensure_utc, parse_memory_state
from vocab_core.session_builders.pool_types import Bucket, PoolState
from vocab_core.session_builders.pool_utils import (
    build_weighted_pool,
    shuffle_in_place,
    take_distinct,
)

if TYPE_CHECKING:
    from vocab_core.storage import StorageCollaborator

logger = logging.getLogger(__name__)

ItemRecord = tuple[Hashable, Optional[StoredState]]


def classify_state(
    state: Optional[MemoryState],
    now: datetime,
    mastered_stability: float = DEFAULT_MASTERED_STABILITY
) -> Bucket:
    """
    Bucket for a parsed memory state (None = no state yet).
    """
    if state is None or state.is_fresh:
        return "fresh"
    if state.next_review <= now:
        return "due"
    if 0 < state.stability <= mastered_stability:
        return "learning"
    return "mastered"


def build_practice_pool_state(
    records: Iterable[ItemRecord],
    now: Optional[datetime] = None,
    mastered_stability: float = DEFAULT_MASTERED_STABILITY
) -> PoolState:
    """
    Partition stored items into practice buckets.

    Args:
        records: (item_id, stored payload or None) pairs from storage
        now: Reference time for "due" (defaults to now)
        mastered_stability: Stability above which an item is mastered

    Returns:
        PoolState with every item in exactly one bucket
    """
    now = datetime.now(timezone.utc) if now is None else ensure_utc(now)
    pool_state = PoolState()

    for item_id, payload in records:
        try:
            state = parse_memory_state(payload)
        except MalformedStateError as exc:
            logger.warning("Item %r has malformed memory state (%s); treating as mastered", item_id, exc)
            pool_state.add(item_id, "mastered")
            continue
        pool_state.add(item_id, classify_state(state, now, mastered_stability))

    return pool_state


def create_practice_session(
    pool_state: PoolState,
    limit: int = DEFAULT_PRACTICE_LIMIT,
    rng: Optional[random.Random] = None
) -> list:
    """
    Draw up to `limit` distinct item ids, biased toward items needing review.

    Args:
        pool_state: Bucketed items
        limit: Maximum number of items
        rng: Random source (pass a seeded Random for reproducible draws)

    Returns:
        Distinct item ids in draw order
    """
    weighted = build_weighted_pool(pool_state)
    if not weighted:
        return []
    shuffle_in_place(weighted, rng)
    return take_distinct(weighted, limit)


def due_items_from_snapshot(
    records: Iterable[ItemRecord],
    now: Optional[datetime] = None
) -> list:
    """
    Items whose review is due, most overdue first.

    Items without readable state are always due and come first.
    """
    now = datetime.now(timezone.utc) if now is None else ensure_utc(now)
    unknown: list = []
    due: list[tuple[datetime, Hashable]] = []

    for item_id, payload in records:
        try:
            state = parse_memory_state(payload)
        except MalformedStateError:
            state = None
        if state is None:
            unknown.append(item_id)
        elif state.next_review <= now:
            due.append((state.next_review, item_id))

    due.sort(key=lambda pair: pair[0])
    return unknown + [item_id for _, item_id in due]


class PracticeSelector:
    """
    Selects practice items straight from a storage collaborator.
    """

    def __init__(
        self,
        storage: "StorageCollaborator",
        rng: Optional[random.Random] = None,
        mastered_stability: float = DEFAULT_MASTERED_STABILITY
    ):
        self.storage = storage
        self.rng = rng
        self.mastered_stability = mastered_stability

    def build_pool_state(self, now: Optional[datetime] = None) -> PoolState:
        return build_practice_pool_state(
            self.storage.list_all_items(), now, self.mastered_stability
        )

    def select_for_practice(
        self,
        limit: int = DEFAULT_PRACTICE_LIMIT,
        now: Optional[datetime] = None
    ) -> Sequence[Hashable]:
        pool_state = self.build_pool_state(now)
        selection = create_practice_session(pool_state, limit, self.rng)
        logger.debug(
            "Selected %d of %d items for practice (pools: %s)",
            len(selection), len(pool_state), pool_state.counts(),
        )
        return selection
