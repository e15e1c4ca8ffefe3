"""Session builders for practice activities (quizzes and games)."""

from vocab_core.session_builders.practice_builder import (
    PracticeSelector,
    build_practice_pool_state,
    classify_state,
    create_practice_session,
    due_items_from_snapshot,
)
from vocab_core.session_builders.pool_types import BUCKET_WEIGHTS, PoolState

__all__ = [
    "PracticeSelector",
    "build_practice_pool_state",
    "classify_state",
    "create_practice_session",
    "due_items_from_snapshot",
    "BUCKET_WEIGHTS",
    "PoolState",
]
