import logging

import pytest

from vocab_core.errors import ItemNotFoundError
from vocab_core.fsrs import initialize_memory_state, parse_memory_state


def test_add_word_stores_initial_state(store, now):
    word_id = store.add_word("serendipity", "/ˌserənˈdipədē/", now=now)

    word = store.get_word(word_id)
    assert word.text == "serendipity"
    assert word.created_at == now
    assert parse_memory_state(store.get_memory_state(word_id)) == initialize_memory_state(now)


def test_add_word_is_case_insensitive(store, now):
    first = store.add_word("Huis", now=now)
    assert store.add_word("huis", now=now) == first
    assert len(store.list_words()) == 1


def test_ids_are_sequential(store, now):
    assert [store.add_word(w, now=now) for w in ("a", "b", "c")] == [1, 2, 3]


def test_list_all_items(store, now):
    word_id = store.add_word("fiets", now=now)
    store.import_state(word_id, None)

    assert store.list_all_items() == [(word_id, None)]


def test_unknown_items_raise_not_found(store, now):
    with pytest.raises(ItemNotFoundError):
        store.get_memory_state(42)
    with pytest.raises(ItemNotFoundError):
        store.set_memory_state(42, initialize_memory_state(now))
    with pytest.raises(KeyError):
        store.delete_word(42)


def test_delete_word_removes_state_and_notifies(store, now, change_log):
    word_id = store.add_word("boom", now=now)
    change_log.clear()

    store.delete_word(word_id)

    assert store.list_all_items() == []
    assert change_log == [word_id]


def test_set_memory_state_notifies_once(store, now, change_log):
    word_id = store.add_word("boom", now=now)
    change_log.clear()

    store.set_memory_state(word_id, initialize_memory_state(now))

    assert change_log == [word_id]


def test_unsubscribe(store, now):
    calls = []
    unsubscribe = store.on_change(calls.append)
    unsubscribe()

    store.add_word("stoel", now=now)

    assert calls == []


def test_failing_callback_does_not_block_others(store, now, caplog):
    def broken(item_id):
        raise RuntimeError("observer crashed")

    calls = []
    store.on_change(broken)
    store.on_change(calls.append)

    with caplog.at_level(logging.ERROR, logger="vocab_core.storage"):
        word_id = store.add_word("tafel", now=now)

    assert calls == [word_id]
    assert any(
        r.exc_info and "observer crashed" in str(r.exc_info[1]) for r in caplog.records
    )
