"""
Scheduler - FSRS Algorithm Logic

Pure scheduling and state updates (no storage calls, no clock reads when a
timestamp is given).

Main workflow:
1. Update difficulty from the outcome
2. Recompute retrievability from time since the last review
3. Update stability
4. Derive the interval and next due date
5. Return a new MemoryState

Storage I/O and the review cooldown live in the scheduling module.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from vocab_core.fsrs import memory_state, updates
from vocab_core.fsrs.constants import INITIAL_STABILITY, ReviewOutcome


def process_review(
    state: memory_state.MemoryState,
    outcome: ReviewOutcome,
    timestamp: Optional[datetime] = None
) -> memory_state.MemoryState:
    """
    Apply one review outcome and return the updated memory state.

    The input state is never modified. For a fixed (state, outcome,
    timestamp) the result is always the same.

    Args:
        state: Current memory state
        outcome: AGAIN, HARD, GOOD or EASY
        timestamp: Review instant (defaults to now)

    Returns:
        New MemoryState
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    timestamp = memory_state.ensure_utc(timestamp)
    outcome = ReviewOutcome(outcome)

    difficulty = updates.update_difficulty(state.difficulty, outcome)

    prior_stability = state.stability
    # Retrievability just before this review; untouched for never-reviewed items
    retrievability = state.retrievability
    if state.is_fresh:
        # Zero-stability sentinel: grow from the initial stability at full recall
        prior_stability = INITIAL_STABILITY
        retrievability = 1.0
    elif state.last_review is not None:
        elapsed = memory_state.get_elapsed_days(state.last_review, timestamp)
        retrievability = memory_state.calculate_retrievability(prior_stability, elapsed)

    if outcome == ReviewOutcome.AGAIN:
        stability = updates.update_stability_on_failure(prior_stability)
    else:
        stability = updates.update_stability_on_success(
            prior_stability, retrievability, difficulty, outcome
        )

    interval = updates.calculate_interval(stability, difficulty, outcome)
    next_review = timestamp + timedelta(days=updates.round_interval_days(interval))

    return memory_state.MemoryState(
        difficulty=difficulty,
        stability=stability,
        retrievability=retrievability,
        last_review=timestamp,
        next_review=next_review,
        review_count=state.review_count + 1,
    )
