"""
Memory State - FSRS Item State and Retrievability

Defines the per-item memory state and the derived quantities used by the
scheduler.

Key concepts:
- Stability (S): Days until predicted recall decays to ~90%
- Difficulty (D): How hard the item is for this learner (0-10 scale)
- Retrievability (R): Probability of successful recall at time t

The field names of MemoryState are the storage contract: stored payloads
use exactly these keys.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vocab_core.errors import MalformedStateError
from vocab_core.fsrs.constants import (
    D_MAX,
    D_MIN,
    INITIAL_INTERVAL_DAYS,
    INITIAL_STABILITY,
    RECALL_BASE,
)


class MemoryState(BaseModel):
    """
    Memory state for a single vocabulary item.

    Instances are immutable; the scheduler always builds a new state.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    difficulty: float = Field(..., ge=D_MIN, le=D_MAX)
    stability: float = Field(..., ge=0.0)  # 0 marks a fresh, never-reviewed item
    retrievability: float = Field(..., ge=0.0, le=1.0)
    last_review: Optional[datetime] = None
    next_review: datetime
    # Payloads written at word registration time carry no review_count
    review_count: int = Field(default=0, ge=0)

    @field_validator("last_review", "next_review")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps in stored data are UTC."""
        return ensure_utc(value) if value is not None else None

    @property
    def is_fresh(self) -> bool:
        return self.stability == 0

    def to_json(self) -> str:
        return self.model_dump_json()


StoredState = Union[MemoryState, Mapping[str, Any], str, bytes]


def parse_memory_state(payload: Optional[StoredState]) -> Optional[MemoryState]:
    """
    Turn a stored payload into a MemoryState.

    Args:
        payload: MemoryState, mapping, or JSON text as kept by storage

    Returns:
        MemoryState, or None when the item has no state yet

    Raises:
        MalformedStateError: payload can't be parsed or fails validation
    """
    if payload is None:
        return None
    if isinstance(payload, MemoryState):
        return payload

    try:
        if isinstance(payload, (str, bytes)):
            return MemoryState.model_validate_json(payload)
        if isinstance(payload, Mapping):
            return MemoryState.model_validate(dict(payload))
    except ValidationError as exc:
        raise MalformedStateError(
            f"Invalid memory state: {exc.error_count()} validation error(s)",
            payload=payload,
        ) from exc

    raise MalformedStateError(
        f"Unsupported memory state payload type: {type(payload).__name__}",
        payload=payload,
    )


def calculate_retrievability(stability: float, elapsed_days: float) -> float:
    """
    Calculate retrievability on the forgetting curve.

    Formula: R = 0.9 ^ (Δt / S)

    Where:
    - Δt = days since the last review
    - S = stability (in days)

    At Δt == S the predicted recall is exactly 90%.

    Args:
        stability: Current stability in days (must be > 0)
        elapsed_days: Days since last review

    Returns:
        Retrievability between 0 and 1
    """
    if elapsed_days <= 0:
        return 1.0
    if stability <= 0:
        raise ValueError("Retrievability is undefined for non-positive stability")

    return RECALL_BASE ** (elapsed_days / stability)


def ensure_utc(timestamp: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with stored ones."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def get_elapsed_days(last_review: Optional[datetime], now: datetime) -> float:
    """
    Days between the last review and now (0 if never reviewed).
    """
    if last_review is None:
        return 0.0

    delta = now - last_review
    return delta.total_seconds() / 86400.0  # Convert to days


def initialize_memory_state(now: Optional[datetime] = None) -> MemoryState:
    """
    Initial state for a newly registered vocabulary item.

    Args:
        now: Registration instant (defaults to current UTC time)

    Returns:
        MemoryState due one day after registration
    """
    now = datetime.now(timezone.utc) if now is None else ensure_utc(now)

    return MemoryState(
        difficulty=D_MIN,
        stability=INITIAL_STABILITY,
        retrievability=1.0,
        last_review=None,
        next_review=now + timedelta(days=INITIAL_INTERVAL_DAYS),
        review_count=0,
    )
