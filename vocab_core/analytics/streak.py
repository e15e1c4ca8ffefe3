"""
Study streak: consecutive calendar days with at least one review.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from vocab_core.errors import MalformedStateError
from vocab_core.fsrs.memory_state import ensure_utc, parse_memory_state

logger = logging.getLogger(__name__)


def resolve_timezone(tz: Optional[tzinfo] = None) -> tzinfo:
    """The given zone, or the system's local zone."""
    if tz is not None:
        return tz
    return datetime.now().astimezone().tzinfo


def to_local_date(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    return ensure_utc(timestamp).astimezone(resolve_timezone(tz)).date()


def collect_last_reviews(records: Iterable[tuple]) -> list[datetime]:
    """
    Non-null last_review timestamps from (item_id, stored payload) pairs.

    Items with unreadable state are skipped.
    """
    last_reviews = []
    for item_id, payload in records:
        try:
            state = parse_memory_state(payload)
        except MalformedStateError as exc:
            logger.warning("Skipping item %r with malformed memory state (%s)", item_id, exc)
            continue
        if state is not None and state.last_review is not None:
            last_reviews.append(state.last_review)
    return last_reviews


def calculate_streak_days(
    last_reviews: Iterable[Optional[datetime]],
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None
) -> int:
    """
    Count consecutive review days ending today or yesterday.

    Args:
        last_reviews: Last-review timestamps (None entries are ignored)
        today: Reference day (defaults to today in `tz`)
        tz: Zone defining calendar days (defaults to system local)

    Returns:
        Streak length in days; 0 when the latest review is older than yesterday
    """
    days = sorted(
        {to_local_date(ts, tz) for ts in last_reviews if ts is not None},
        reverse=True,
    )
    if not days:
        return 0

    if today is None:
        today = datetime.now(resolve_timezone(tz)).date()
    yesterday = today - timedelta(days=1)

    # Missed a day: streak is broken
    if days[0] not in (today, yesterday):
        return 0

    streak = 1
    for previous, current in zip(days, days[1:]):
        if previous - current != timedelta(days=1):
            break
        streak += 1
    return streak
