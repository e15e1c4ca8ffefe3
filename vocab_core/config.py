"""
Environment-driven settings for the scheduling core.

Values are read from the process environment (and a local .env file, if
present). Every setting has a default, so nothing is required.

Variables:
- VOCAB_REVIEW_COOLDOWN_MINUTES: window after a review in which further
  reviews of the same item are ignored (default 50)
- VOCAB_PRACTICE_LIMIT: default number of items drawn for practice (20)
- VOCAB_MASTERED_STABILITY: stability (days) above which an item counts
  as mastered (30)
- VOCAB_TIMEZONE: IANA zone used for calendar-day statistics; unset means
  the system's local zone
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from vocab_core.errors import ConfigError
from vocab_core.fsrs.constants import REVIEW_COOLDOWN_MINUTES

# Load environment
load_dotenv()

DEFAULT_PRACTICE_LIMIT = 20
DEFAULT_MASTERED_STABILITY = 30.0


@dataclass(frozen=True)
class Settings:
    review_cooldown: timedelta = timedelta(minutes=REVIEW_COOLDOWN_MINUTES)
    practice_limit: int = DEFAULT_PRACTICE_LIMIT
    mastered_stability: float = DEFAULT_MASTERED_STABILITY
    timezone: Optional[tzinfo] = None


def _read_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {raw!r}")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _read_timezone(name: str) -> Optional[tzinfo]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"{name} is not a known time zone: {raw!r}") from exc


def get_settings() -> Settings:
    """
    Build Settings from the current environment.

    Raises:
        ConfigError: a variable is set to an unusable value
    """
    cooldown_minutes = _read_number(
        "VOCAB_REVIEW_COOLDOWN_MINUTES", REVIEW_COOLDOWN_MINUTES, float
    )
    return Settings(
        review_cooldown=timedelta(minutes=cooldown_minutes),
        practice_limit=_read_number("VOCAB_PRACTICE_LIMIT", DEFAULT_PRACTICE_LIMIT, int),
        mastered_stability=_read_number(
            "VOCAB_MASTERED_STABILITY", DEFAULT_MASTERED_STABILITY, float
        ),
        timezone=_read_timezone("VOCAB_TIMEZONE"),
    )
