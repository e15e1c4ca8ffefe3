"""
Service layer to assemble the statistics dashboard.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from vocab_core.analytics.metrics import (
    build_day_index,
    compute_average_retention,
    compute_category_counts,
    compute_reviewed_today,
    compute_weekly_progress,
)
from vocab_core.analytics.queries import load_memory_state_df, load_registration_days_df
from vocab_core.analytics.streak import (
    calculate_streak_days,
    collect_last_reviews,
    to_local_date,
)
from vocab_core.analytics.types import DashboardData
from vocab_core.config import Settings, get_settings


def build_dashboard(
    storage,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None
) -> DashboardData:
    """
    Build all numbers and series needed by the statistics page.
    """
    settings = settings or get_settings()
    tz = settings.timezone
    now = now or datetime.now(timezone.utc)
    today = to_local_date(now, tz)

    records = list(storage.list_all_items())
    states_df = load_memory_state_df(records, tz)
    registrations_df = load_registration_days_df(storage, tz)
    day_index = build_day_index(today)
    categories = compute_category_counts(states_df, settings.mastered_stability)

    return DashboardData(
        total_words=len(states_df),
        reviewed_today=compute_reviewed_today(states_df, today),
        average_retention=compute_average_retention(states_df),
        mastered=categories["mastered"],
        learning=categories["learning"],
        new=categories["new"],
        streak_days=calculate_streak_days(collect_last_reviews(records), today, tz),
        weekly_progress=compute_weekly_progress(states_df, registrations_df, day_index),
    )
