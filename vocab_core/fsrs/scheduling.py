"""
Scheduling - Review Recording

Ties the pure update rule to storage.

Main workflow:
1. Load the item's memory state (or start from the initial state)
2. Skip the update if the item was reviewed inside the cooldown window
3. Apply the update rule
4. Save the new state (storage notifies its observers)

Every outcome is returned as a ReviewResult value. Only storage I/O errors
propagate as exceptions.
"""

from __future__ import annotations
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from vocab_core.errors import ItemNotFoundError, MalformedStateError
from vocab_core.fsrs import memory_state, scheduler
from vocab_core.fsrs.constants import ReviewOutcome, REVIEW_COOLDOWN_MINUTES

if TYPE_CHECKING:
    from vocab_core.storage import ItemId, StorageCollaborator

logger = logging.getLogger(__name__)


class ReviewStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FAILED = "failed"


class ReviewReason(str, Enum):
    COOLDOWN = "cooldown"    # Reviewed too recently; not an error
    NOT_FOUND = "not_found"  # No such item in storage


@dataclass(frozen=True)
class ReviewResult:
    """Outcome of ReviewScheduler.record_review."""
    item_id: ItemId
    status: ReviewStatus
    reason: Optional[ReviewReason] = None
    state: Optional[memory_state.MemoryState] = None  # Saved state when accepted

    @property
    def accepted(self) -> bool:
        return self.status is ReviewStatus.ACCEPTED


class ReviewScheduler:
    """
    Records review outcomes against a storage collaborator.

    Reviews of the same item are serialized; different items can be
    reviewed concurrently.
    """

    def __init__(
        self,
        storage: StorageCollaborator,
        cooldown: timedelta = timedelta(minutes=REVIEW_COOLDOWN_MINUTES)
    ):
        self.storage = storage
        self.cooldown = cooldown
        self._item_locks: defaultdict[ItemId, threading.Lock] = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()

    def _lock_for(self, item_id: ItemId) -> threading.Lock:
        with self._registry_lock:
            return self._item_locks[item_id]

    def _forget_lock(self, item_id: ItemId, lock: threading.Lock) -> None:
        with self._registry_lock:
            if self._item_locks.get(item_id) is lock:
                del self._item_locks[item_id]

    def _load_base_state(
        self,
        item_id: ItemId,
        timestamp: datetime
    ) -> memory_state.MemoryState:
        """
        Current state for an item, or the initial state if it has none.

        Raises ItemNotFoundError for unknown items.
        """
        payload = self.storage.get_memory_state(item_id)
        try:
            state = memory_state.parse_memory_state(payload)
        except MalformedStateError as exc:
            logger.warning("Item %r has malformed memory state (%s); reinitializing", item_id, exc)
            state = None

        if state is None or state.is_fresh:
            return memory_state.initialize_memory_state(timestamp)
        return state

    def is_in_cooldown(self, state: memory_state.MemoryState, timestamp: datetime) -> bool:
        if state.last_review is None:
            return False
        return timestamp - state.last_review < self.cooldown

    def record_review(
        self,
        item_id: ItemId,
        outcome: ReviewOutcome,
        timestamp: Optional[datetime] = None
    ) -> ReviewResult:
        """
        Apply a review outcome to one item and persist the result.

        Args:
            item_id: Storage identifier of the vocabulary item
            outcome: AGAIN, HARD, GOOD or EASY
            timestamp: Review instant (defaults to now)

        Returns:
            ReviewResult: ACCEPTED with the new state, REJECTED/COOLDOWN,
            or FAILED/NOT_FOUND
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)
        timestamp = memory_state.ensure_utc(timestamp)
        outcome = ReviewOutcome(outcome)

        lock = self._lock_for(item_id)
        with lock:
            try:
                state = self._load_base_state(item_id, timestamp)
            except ItemNotFoundError:
                logger.warning("Word with id %r not found for review", item_id)
                self._forget_lock(item_id, lock)
                return ReviewResult(item_id, ReviewStatus.FAILED, ReviewReason.NOT_FOUND)

            if self.is_in_cooldown(state, timestamp):
                logger.info("Review of item %r skipped due to cooldown", item_id)
                return ReviewResult(item_id, ReviewStatus.REJECTED, ReviewReason.COOLDOWN)

            new_state = scheduler.process_review(state, outcome, timestamp)

            try:
                self.storage.set_memory_state(item_id, new_state)
            except ItemNotFoundError:
                # Deleted between read and write
                logger.warning("Word with id %r disappeared before its review was saved", item_id)
                self._forget_lock(item_id, lock)
                return ReviewResult(item_id, ReviewStatus.FAILED, ReviewReason.NOT_FOUND)

        logger.debug(
            "Recorded %s for item %r: S=%.2f D=%.2f next=%s",
            outcome.name, item_id, new_state.stability, new_state.difficulty,
            new_state.next_review.isoformat(),
        )
        return ReviewResult(item_id, ReviewStatus.ACCEPTED, state=new_state)
