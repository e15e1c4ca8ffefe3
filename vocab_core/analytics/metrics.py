"""
Metric computations for the statistics dashboard.
"""

from __future__ import annotations

import math
from datetime import date

import pandas as pd

from vocab_core.analytics.constants import PROGRESS_WINDOW_DAYS


def build_day_index(today: date, days: int = PROGRESS_WINDOW_DAYS) -> pd.DatetimeIndex:
    """
    Dense day index of the last `days` days, oldest first, ending today.
    """
    return pd.date_range(end=pd.Timestamp(today), periods=days, freq="D")


def count_per_day(days: pd.Series, day_index: pd.DatetimeIndex) -> pd.Series:
    """
    Number of entries falling on each day of the index (zeros elsewhere).
    """
    counts = days.dropna().value_counts()
    return counts.reindex(day_index, fill_value=0).astype("int64")


def compute_reviewed_today(states_df: pd.DataFrame, today: date) -> int:
    if states_df.empty:
        return 0
    return int((states_df["last_review_day"] == pd.Timestamp(today)).sum())


def compute_average_retention(states_df: pd.DataFrame) -> int:
    """
    Mean stored retrievability as a whole percent.

    Items without readable state count as 0.
    """
    if states_df.empty:
        return 0
    total = states_df["retrievability"].fillna(0.0).sum()
    return int(math.floor(total / len(states_df) * 100 + 0.5))


def compute_category_counts(
    states_df: pd.DataFrame,
    mastered_stability: float
) -> dict[str, int]:
    """
    Mastered / learning / new counts by stability.

    Malformed items are left out of every category.
    """
    if states_df.empty:
        return {"mastered": 0, "learning": 0, "new": 0}

    readable = states_df[~states_df["malformed"]]
    stability = readable["stability"]
    return {
        "mastered": int((stability > mastered_stability).sum()),
        "learning": int(((stability > 0) & (stability <= mastered_stability)).sum()),
        "new": int((stability.isna() | (stability == 0)).sum()),
    }


def compute_weekly_progress(
    states_df: pd.DataFrame,
    registrations_df: pd.DataFrame,
    day_index: pd.DatetimeIndex
) -> pd.DataFrame:
    """
    Words reviewed (by last review) and learned (by registration) per day.
    """
    return pd.DataFrame({
        "reviewed": count_per_day(states_df["last_review_day"], day_index),
        "learned": count_per_day(registrations_df["created_day"], day_index),
    }, index=day_index)
