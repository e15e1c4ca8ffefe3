"""
VocabularyTrainer - entry point for study, quiz/game and statistics screens.

Wires one storage collaborator into the review scheduler, the practice
selector and the statistics helpers.
"""

from __future__ import annotations

import random
from datetime import date, datetime
from typing import Optional

from vocab_core import analytics
from vocab_core.config import Settings, get_settings
from vocab_core.fsrs import (
    MemoryState,
    ReviewOutcome,
    ReviewResult,
    ReviewScheduler,
    initialize_memory_state,
)
from vocab_core.session_builders import PracticeSelector, due_items_from_snapshot
from vocab_core.storage import ItemId, StorageCollaborator


class VocabularyTrainer:

    def __init__(
        self,
        storage: StorageCollaborator,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None
    ):
        self.storage = storage
        self.settings = settings or get_settings()
        self.scheduler = ReviewScheduler(storage, cooldown=self.settings.review_cooldown)
        self.selector = PracticeSelector(
            storage, rng=rng, mastered_stability=self.settings.mastered_stability
        )

    def record_review(
        self,
        item_id: ItemId,
        outcome: ReviewOutcome,
        now: Optional[datetime] = None
    ) -> ReviewResult:
        return self.scheduler.record_review(item_id, outcome, now)

    def select_for_practice(
        self,
        limit: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> list:
        if limit is None:
            limit = self.settings.practice_limit
        return list(self.selector.select_for_practice(limit, now))

    def calculate_streak_days(self, today: Optional[date] = None) -> int:
        last_reviews = analytics.collect_last_reviews(self.storage.list_all_items())
        return analytics.calculate_streak_days(last_reviews, today, self.settings.timezone)

    def initialize_memory_state(self, now: Optional[datetime] = None) -> MemoryState:
        return initialize_memory_state(now)

    def get_due_items(self, now: Optional[datetime] = None) -> list:
        return due_items_from_snapshot(self.storage.list_all_items(), now)

    def build_dashboard(self, now: Optional[datetime] = None) -> analytics.DashboardData:
        return analytics.build_dashboard(self.storage, now, self.settings)
