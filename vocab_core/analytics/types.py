"""
Types for the learning statistics dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from vocab_core.analytics.constants import CATEGORY_LABELS


@dataclass(frozen=True)
class DashboardData:
    """
    Precomputed numbers and series for the statistics page.
    """
    total_words: int
    reviewed_today: int
    average_retention: int  # Percent, 0-100
    mastered: int
    learning: int
    new: int
    streak_days: int
    weekly_progress: pd.DataFrame  # Index: last 7 days; columns: reviewed, learned

    def category_counts(self) -> dict[str, int]:
        return {key: getattr(self, key) for key in CATEGORY_LABELS}

    def labelled_category_counts(self) -> dict[str, int]:
        """Category counts keyed by display label, for charts."""
        return {label: getattr(self, key) for key, label in CATEGORY_LABELS.items()}
