"""
Spaced-repetition scheduling core for vocabulary learning.
"""

from vocab_core.fsrs import MemoryState, ReviewOutcome, ReviewResult, ReviewStatus, ReviewReason
from vocab_core.storage import StorageCollaborator, WordStore
from vocab_core.trainer import VocabularyTrainer

__all__ = [
    "MemoryState",
    "ReviewOutcome",
    "ReviewResult",
    "ReviewStatus",
    "ReviewReason",
    "StorageCollaborator",
    "WordStore",
    "VocabularyTrainer",
]
