"""
Exception hierarchy for the scheduling core.
"""

from __future__ import annotations


class VocabCoreError(Exception):
    """Base class for all errors raised by vocab_core."""


class ItemNotFoundError(VocabCoreError, KeyError):
    """The referenced vocabulary item does not exist in storage."""

    def __init__(self, item_id):
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"Vocabulary item {self.item_id!r} not found"


class MalformedStateError(VocabCoreError, ValueError):
    """Stored memory-state data failed to parse or validate."""

    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload


class ConfigError(VocabCoreError, ValueError):
    """An environment setting has an invalid value."""
