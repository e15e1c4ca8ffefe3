"""
Constants for the learning statistics dashboard.
"""

from __future__ import annotations

from typing import Final


CATEGORY_LABELS: Final[dict[str, str]] = {
    "mastered": "Mastered",
    "learning": "Learning",
    "new": "New",
}

PROGRESS_WINDOW_DAYS: Final[int] = 7

STATE_COLUMNS: Final[list[str]] = [
    "item_id",
    "stability",
    "retrievability",
    "last_review_day",
    "malformed",
]
