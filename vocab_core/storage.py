"""
Storage collaborator for memory state.

The scheduling core never talks to a database directly. It is handed an
object implementing StorageCollaborator, which owns how word records and
their memory state are kept.

WordStore is an in-memory implementation. It keeps each word's memory state
as a serialized JSON payload, the same shape previously saved data uses, so
malformed or legacy payloads reach the core exactly as they would from disk.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Hashable, Optional, Protocol, Sequence

from vocab_core.errors import ItemNotFoundError
from vocab_core.fsrs.memory_state import (
    MemoryState,
    StoredState,
    ensure_utc,
    initialize_memory_state,
)

logger = logging.getLogger(__name__)

ItemId = Hashable
ChangeCallback = Callable[[ItemId], None]


class StorageCollaborator(Protocol):
    """Operations the core needs from whatever persists memory state."""

    def get_memory_state(self, item_id: ItemId) -> Optional[StoredState]:
        """Stored payload, None if the item has no state; ItemNotFoundError if unknown."""
        ...

    def set_memory_state(self, item_id: ItemId, state: MemoryState) -> None:
        """Persist state and notify change callbacks; ItemNotFoundError if unknown."""
        ...

    def list_all_items(self) -> Sequence[tuple[ItemId, Optional[StoredState]]]:
        ...

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback fired after each successful write; returns an unsubscribe function."""
        ...


@dataclass(frozen=True)
class Word:
    """A saved vocabulary item."""
    id: int
    text: str
    phonetic: str
    created_at: datetime
    fsrs_params: Optional[str] = None  # Serialized MemoryState


class WordStore:
    """
    Thread-safe in-memory word store.

    Implements StorageCollaborator. Words are keyed by integer ids assigned
    on registration.
    """

    def __init__(self):
        self._words: dict[int, Word] = {}
        self._next_id = 1
        self._callbacks: list[ChangeCallback] = []
        self._lock = threading.RLock()

    # ---- Change Notification ----

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def _notify(self, item_id: ItemId) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(item_id)
            except Exception:
                # A broken observer must not undo a completed write
                logger.exception("Change callback %r failed for item %r", callback, item_id)

    # ---- Word Management ----

    def add_word(
        self,
        text: str,
        phonetic: str = "",
        now: Optional[datetime] = None
    ) -> int:
        """
        Register a word with an initial memory state.

        Words are unique case-insensitively; re-adding returns the existing id.

        Args:
            text: The word itself
            phonetic: Pronunciation hint
            now: Registration time (defaults to now)

        Returns:
            The word's id
        """
        now = datetime.now(timezone.utc) if now is None else ensure_utc(now)
        with self._lock:
            for word in self._words.values():
                if word.text.lower() == text.lower():
                    return word.id

            word = Word(
                id=self._next_id,
                text=text,
                phonetic=phonetic,
                created_at=now,
                fsrs_params=initialize_memory_state(now).to_json(),
            )
            self._words[word.id] = word
            self._next_id += 1

        logger.debug("Registered word %r as item %d", text, word.id)
        self._notify(word.id)
        return word.id

    def get_word(self, item_id: ItemId) -> Word:
        with self._lock:
            try:
                return self._words[item_id]
            except KeyError:
                raise ItemNotFoundError(item_id) from None

    def list_words(self) -> list[Word]:
        with self._lock:
            return list(self._words.values())

    def delete_word(self, item_id: ItemId) -> None:
        """Remove a word together with its memory state."""
        with self._lock:
            if item_id not in self._words:
                raise ItemNotFoundError(item_id)
            del self._words[item_id]
        self._notify(item_id)

    def import_state(self, item_id: ItemId, payload: Optional[str]) -> None:
        """
        Store a serialized payload as-is, e.g. when loading previously saved data.

        No validation happens here; the core classifies unreadable payloads
        when it reads them.
        """
        with self._lock:
            word = self.get_word(item_id)
            self._words[item_id] = replace(word, fsrs_params=payload)
        self._notify(item_id)

    # ---- StorageCollaborator ----

    def get_memory_state(self, item_id: ItemId) -> Optional[str]:
        return self.get_word(item_id).fsrs_params

    def set_memory_state(self, item_id: ItemId, state: MemoryState) -> None:
        with self._lock:
            word = self.get_word(item_id)
            self._words[item_id] = replace(word, fsrs_params=state.to_json())
        self._notify(item_id)

    def list_all_items(self) -> list[tuple[ItemId, Optional[str]]]:
        with self._lock:
            return [(word.id, word.fsrs_params) for word in self._words.values()]
