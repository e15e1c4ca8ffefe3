"""
FSRS - Free Spaced Repetition Scheduler

Forgetting-curve scheduling for vocabulary items.

This package implements:
- An interpretable memory state (Stability, Difficulty, Retrievability)
- Forgetting curve: R = 0.9^(Δt/S)
- A pure review update rule
- Review recording against injected storage, with a 50-minute cooldown

Quick start:
    from vocab_core import fsrs
    from vocab_core.storage import WordStore

    store = WordStore()
    word_id = store.add_word("serendipity")

    # Pure update (no storage)
    state = fsrs.process_review(fsrs.initialize_memory_state(), fsrs.ReviewOutcome.GOOD)

    # Record a review through storage
    result = fsrs.ReviewScheduler(store).record_review(word_id, fsrs.ReviewOutcome.GOOD)
"""

# Core scheduler API (algorithm logic)
from vocab_core.fsrs.scheduler import process_review

# Review recording
from vocab_core.fsrs.scheduling import (
    ReviewScheduler,
    ReviewResult,
    ReviewStatus,
    ReviewReason,
)

# Constants and parameters
from vocab_core.fsrs.constants import (
    ReviewOutcome,
    INITIAL_STABILITY,
    S_FLOOR,
    D_MIN,
    D_MAX,
    BASE_GAIN,
    DIFFICULTY_DELTA,
    REVIEW_COOLDOWN_MINUTES,
)

# Memory state
from vocab_core.fsrs.memory_state import (
    MemoryState,
    calculate_retrievability,
    get_elapsed_days,
    initialize_memory_state,
    parse_memory_state,
)


__all__ = [
    # Core algorithm
    "process_review",

    # Review recording
    "ReviewScheduler",
    "ReviewResult",
    "ReviewStatus",
    "ReviewReason",

    # Enums
    "ReviewOutcome",

    # Memory state
    "MemoryState",
    "calculate_retrievability",
    "get_elapsed_days",
    "initialize_memory_state",
    "parse_memory_state",

    # Parameters
    "INITIAL_STABILITY",
    "S_FLOOR",
    "D_MIN",
    "D_MAX",
    "BASE_GAIN",
    "DIFFICULTY_DELTA",
    "REVIEW_COOLDOWN_MINUTES",
]
