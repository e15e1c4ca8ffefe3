import json
import threading
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from vocab_core.errors import ItemNotFoundError
from vocab_core.fsrs import (
    ReviewOutcome,
    ReviewReason,
    ReviewScheduler,
    ReviewStatus,
    parse_memory_state,
)

from tests.conftest import make_payload


@pytest.fixture
def scheduler(store):
    return ReviewScheduler(store)


@pytest.fixture
def word_id(store, now):
    return store.add_word("apple", now=now - timedelta(days=1))


def stored_state(store, item_id):
    return parse_memory_state(store.get_memory_state(item_id))


def test_first_review_is_accepted_and_saved(scheduler, store, word_id, now, change_log):
    change_log.clear()

    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now)

    assert result.accepted
    assert result.status is ReviewStatus.ACCEPTED
    assert result.reason is None
    state = stored_state(store, word_id)
    assert state == result.state
    assert state.review_count == 1
    assert state.last_review == now
    assert change_log == [word_id]


def test_review_inside_cooldown_is_rejected_without_changes(scheduler, store, word_id, now, change_log):
    scheduler.record_review(word_id, ReviewOutcome.GOOD, now)
    payload_before = store.get_memory_state(word_id)
    change_log.clear()

    result = scheduler.record_review(word_id, ReviewOutcome.EASY, now + timedelta(minutes=10))

    assert result.status is ReviewStatus.REJECTED
    assert result.reason is ReviewReason.COOLDOWN
    assert result.state is None
    assert store.get_memory_state(word_id) == payload_before
    assert change_log == []


def test_cooldown_against_previously_stored_review(scheduler, store, word_id, now):
    store.import_state(word_id, make_payload(last_review=now - timedelta(minutes=10)))
    payload_before = store.get_memory_state(word_id)

    result = scheduler.record_review(word_id, ReviewOutcome.AGAIN, now)

    assert result.reason is ReviewReason.COOLDOWN
    assert store.get_memory_state(word_id) == payload_before


def test_review_after_cooldown_is_accepted(scheduler, store, word_id, now):
    scheduler.record_review(word_id, ReviewOutcome.GOOD, now)

    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now + timedelta(minutes=50))

    assert result.accepted
    assert stored_state(store, word_id).review_count == 2


def test_custom_cooldown(store, word_id, now):
    scheduler = ReviewScheduler(store, cooldown=timedelta(0))
    scheduler.record_review(word_id, ReviewOutcome.GOOD, now)

    assert scheduler.record_review(word_id, ReviewOutcome.GOOD, now).accepted


def test_unknown_item_fails_with_not_found(scheduler, change_log):
    result = scheduler.record_review(999, ReviewOutcome.GOOD)

    assert result.status is ReviewStatus.FAILED
    assert result.reason is ReviewReason.NOT_FOUND
    assert change_log == []


def test_item_deleted_before_save_fails_with_not_found(now):
    storage = MagicMock()
    storage.get_memory_state.return_value = None
    storage.set_memory_state.side_effect = ItemNotFoundError(1)

    scheduler = ReviewScheduler(storage)
    result = scheduler.record_review(1, ReviewOutcome.GOOD, now)

    assert result.reason is ReviewReason.NOT_FOUND
    assert 1 not in scheduler._item_locks


def test_lock_registry_drops_unknown_and_deleted_items(scheduler, store, word_id, now):
    scheduler.record_review(999, ReviewOutcome.GOOD, now)
    scheduler.record_review(word_id, ReviewOutcome.GOOD, now)
    assert set(scheduler._item_locks) == {word_id}

    store.delete_word(word_id)
    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now + timedelta(days=1))

    assert result.reason is ReviewReason.NOT_FOUND
    assert scheduler._item_locks == {}


def test_missing_state_starts_from_initial_state(scheduler, store, word_id, now):
    store.import_state(word_id, None)

    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now)

    assert result.accepted
    assert result.state.review_count == 1
    assert result.state.stability == pytest.approx(0.4)


def test_malformed_state_is_reinitialized(scheduler, store, word_id, now):
    store.import_state(word_id, "{definitely not json")

    result = scheduler.record_review(word_id, ReviewOutcome.HARD, now)

    assert result.accepted
    assert result.state.review_count == 1
    assert result.state.difficulty == pytest.approx(0.3)
    assert stored_state(store, word_id) == result.state


def test_fresh_sentinel_state_is_reinitialized(scheduler, store, word_id, now):
    store.import_state(word_id, json.dumps({
        "difficulty": 0,
        "stability": 0,
        "retrievability": 1,
        "last_review": None,
        "next_review": now.isoformat(),
    }))

    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now)

    assert result.accepted
    assert result.state.stability == pytest.approx(0.4)
    assert result.state.review_count == 1


def test_accepted_review_increments_count_by_one(scheduler, store, word_id, now):
    store.import_state(word_id, make_payload(last_review=now - timedelta(days=3), review_count=9))

    result = scheduler.record_review(word_id, ReviewOutcome.AGAIN, now)

    assert result.state.review_count == 10
    assert result.state.stability == pytest.approx(1.0)
    assert result.state.next_review == now


def test_storage_errors_propagate(now):
    storage = MagicMock()
    storage.get_memory_state.side_effect = OSError("disk unavailable")

    with pytest.raises(OSError):
        ReviewScheduler(storage).record_review(1, ReviewOutcome.GOOD, now)


def test_naive_timestamps_are_treated_as_utc(scheduler, store, word_id, now):
    result = scheduler.record_review(word_id, ReviewOutcome.GOOD, now.replace(tzinfo=None))
    assert result.state.last_review == now


def test_concurrent_reviews_of_one_item_are_serialized(scheduler, store, word_id, now, change_log):
    change_log.clear()
    results = []
    barrier = threading.Barrier(16)

    def review():
        barrier.wait()
        results.append(scheduler.record_review(word_id, ReviewOutcome.GOOD, now))

    threads = [threading.Thread(target=review) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(r.accepted for r in results) == 1
    assert sum(r.reason is ReviewReason.COOLDOWN for r in results) == 15
    assert stored_state(store, word_id).review_count == 1
    assert change_log == [word_id]


def test_concurrent_reviews_of_different_items(scheduler, store, now):
    ids = [store.add_word(f"word-{i}", now=now) for i in range(8)]
    results = []

    threads = [
        threading.Thread(
            target=lambda item_id=item_id: results.append(
                scheduler.record_review(item_id, ReviewOutcome.EASY, now)
            )
        )
        for item_id in ids
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(r.accepted for r in results)
    assert all(stored_state(store, item_id).review_count == 1 for item_id in ids)
