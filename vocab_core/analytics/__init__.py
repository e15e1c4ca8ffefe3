"""
Analytics package exports.
"""

from vocab_core.analytics.constants import CATEGORY_LABELS
from vocab_core.analytics.service import build_dashboard
from vocab_core.analytics.streak import calculate_streak_days, collect_last_reviews
from vocab_core.analytics.types import DashboardData

__all__ = [
    "CATEGORY_LABELS",
    "build_dashboard",
    "calculate_streak_days",
    "collect_last_reviews",
    "DashboardData",
]
