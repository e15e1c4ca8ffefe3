import json
import random
from datetime import datetime, timedelta, timezone

import pytest

from vocab_core.config import Settings
from vocab_core.storage import WordStore


NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_payload(
    stability=5.0,
    difficulty=2.0,
    retrievability=0.9,
    last_review=None,
    next_review=None,
    review_count=3,
):
    """Serialized memory state the way storage keeps it."""
    return json.dumps({
        "difficulty": difficulty,
        "stability": stability,
        "retrievability": retrievability,
        "last_review": last_review.isoformat() if last_review else None,
        "next_review": (next_review or NOW + timedelta(days=1)).isoformat(),
        "review_count": review_count,
    })


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return WordStore()


@pytest.fixture
def settings():
    return Settings(timezone=timezone.utc)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def change_log(store):
    """Item ids reported by the store's change callback, in order."""
    calls = []
    store.on_change(calls.append)
    return calls
