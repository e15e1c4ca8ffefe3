"""
Memory Updates

Implements the difficulty, stability and interval updates applied on each
accepted review.

Key principles:
- Failures collapse stability sharply
- Successes grow stability more when recall was at risk (low R)
- Hard items (high D) gain less stability and get shorter intervals
"""

from __future__ import annotations
import math

from vocab_core.fsrs.constants import (
    ReviewOutcome,
    D_MIN,
    D_MAX,
    S_FLOOR,
    AGAIN_STABILITY_FACTOR,
    DIFFICULTY_DECAY,
    INTERVAL_DAMPING,
    AGAIN_INTERVAL_DAYS,
    MIN_INTERVAL_DAYS,
    BASE_GAIN,
    DIFFICULTY_DELTA,
)


def clamp_difficulty(difficulty: float) -> float:
    return max(D_MIN, min(D_MAX, difficulty))


def update_difficulty(difficulty: float, outcome: ReviewOutcome) -> float:
    """
    Shift difficulty by the outcome's fixed delta.

    Formula:
        D_new = clip(D + delta(outcome), 0, 10)

    Args:
        difficulty: Current difficulty
        outcome: Review outcome

    Returns:
        New difficulty value (clipped to [0, 10])
    """
    return clamp_difficulty(difficulty + DIFFICULTY_DELTA[outcome])


def update_stability_on_success(
    stability: float,
    retrievability: float,
    difficulty: float,
    outcome: ReviewOutcome
) -> float:
    """
    Update stability after successful retrieval (Hard/Good/Easy).

    Formula:
        increase = base_gain(outcome) * (1 - R) * exp(-0.5 * D)
        S_new = S * (1 + increase)

    Where:
        - (1 - R) rewards near-miss recalls
        - exp(-0.5 * D) shrinks gains for difficult items

    An item reviewed at R == 1 (never reviewed before) keeps its stability.

    Args:
        stability: Current stability (S)
        retrievability: Retrievability just before this review (R)
        difficulty: Difficulty after this review's update
        outcome: HARD, GOOD or EASY

    Returns:
        New stability value
    """
    if outcome == ReviewOutcome.AGAIN:
        raise ValueError("Use update_stability_on_failure for AGAIN outcomes")

    difficulty_factor = math.exp(DIFFICULTY_DECAY * difficulty)
    increase = BASE_GAIN[outcome] * (1.0 - retrievability) * difficulty_factor

    return stability * (1.0 + increase)


def update_stability_on_failure(stability: float) -> float:
    """
    Update stability after failed retrieval (Again).

    Formula:
        S_new = max(0.1, S * 0.2)

    The floor keeps stability strictly positive so retrievability stays
    defined.
    """
    return max(S_FLOOR, stability * AGAIN_STABILITY_FACTOR)


def calculate_interval(
    stability: float,
    difficulty: float,
    outcome: ReviewOutcome
) -> float:
    """
    Days until the next review.

    Formula:
        AGAIN:     0.25 days
        otherwise: max(1, S * exp(-0.1 * D))

    Args:
        stability: Stability after this review
        difficulty: Difficulty after this review
        outcome: Review outcome

    Returns:
        Interval in (possibly fractional) days; callers round it with
        round_interval_days
    """
    if outcome == ReviewOutcome.AGAIN:
        return AGAIN_INTERVAL_DAYS

    damping = math.exp(INTERVAL_DAMPING * difficulty)
    return max(MIN_INTERVAL_DAYS, stability * damping)


def round_interval_days(interval: float) -> int:
    """Whole days, halves rounded up."""
    return int(math.floor(interval + 0.5))
