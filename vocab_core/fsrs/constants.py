"""
FSRS Constants and Parameters

All tunable parameters of the forgetting-curve model in one place.
"""

from enum import IntEnum


# ---- Review Outcomes ----

class ReviewOutcome(IntEnum):
    """Learner's (or quiz-inferred) grade for a retrieval attempt."""
    AGAIN = 1   # Forgot completely
    HARD = 2    # Remembered with difficulty
    GOOD = 3    # Remembered correctly
    EASY = 4    # Remembered very easily

    @classmethod
    def from_correctness(cls, correct: bool) -> "ReviewOutcome":
        """Quizzes and games only know right/wrong: GOOD or HARD."""
        return cls.GOOD if correct else cls.HARD


# ---- Global Constants ----

INITIAL_STABILITY = 0.4     # Stability of a newly initialized item (days)
INITIAL_INTERVAL_DAYS = 1   # First review is due one day after registration
D_MIN = 0.0                 # Minimum difficulty
D_MAX = 10.0                # Maximum difficulty
S_FLOOR = 0.1               # Stability never collapses below this
RECALL_BASE = 0.9           # R = RECALL_BASE ** (t / S)


# ---- Learning Parameters ----

AGAIN_STABILITY_FACTOR = 0.2  # Stability multiplier on failure
DIFFICULTY_DECAY = -0.5       # exp(DIFFICULTY_DECAY * D) scales stability gains
INTERVAL_DAMPING = -0.1       # exp(INTERVAL_DAMPING * D) scales the interval
AGAIN_INTERVAL_DAYS = 0.25    # Rounds to 0 whole days: due again at once
MIN_INTERVAL_DAYS = 1.0


# ---- Base Stability Gain by Outcome ----

BASE_GAIN = {
    ReviewOutcome.HARD: 0.5,
    ReviewOutcome.GOOD: 1.0,
    ReviewOutcome.EASY: 1.5,
}


# ---- Difficulty Change by Outcome ----

DIFFICULTY_DELTA = {
    ReviewOutcome.AGAIN: +1.2,
    ReviewOutcome.HARD: +0.3,
    ReviewOutcome.GOOD: -0.1,
    ReviewOutcome.EASY: -0.3,
}


# ---- Review Recording ----

REVIEW_COOLDOWN_MINUTES = 50  # Reviews inside this window don't touch scheduling
