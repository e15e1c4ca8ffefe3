"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Iterable, Optional

import pandas as pd

from vocab_core.analytics.constants import STATE_COLUMNS
from vocab_core.analytics.streak import to_local_date
from vocab_core.errors import MalformedStateError
from vocab_core.fsrs.memory_state import parse_memory_state

logger = logging.getLogger(__name__)


def load_memory_state_df(
    records: Iterable[tuple],
    tz: Optional[tzinfo] = None
) -> pd.DataFrame:
    """
    One row per item with its stability, stored retrievability and the local
    day of its last review.

    Items without state have NaN numbers; malformed items are flagged.
    """
    rows = []
    for item_id, payload in records:
        try:
            state = parse_memory_state(payload)
        except MalformedStateError as exc:
            logger.warning("Item %r has malformed memory state (%s)", item_id, exc)
            rows.append({"item_id": item_id, "malformed": True})
            continue

        if state is None:
            rows.append({"item_id": item_id, "malformed": False})
            continue

        rows.append({
            "item_id": item_id,
            "stability": state.stability,
            "retrievability": state.retrievability,
            "last_review_day": (
                pd.Timestamp(to_local_date(state.last_review, tz))
                if state.last_review is not None
                else pd.NaT
            ),
            "malformed": False,
        })

    df = pd.DataFrame(rows, columns=STATE_COLUMNS)
    df["stability"] = df["stability"].astype("float64")
    df["retrievability"] = df["retrievability"].astype("float64")
    df["last_review_day"] = pd.to_datetime(df["last_review_day"])
    df["malformed"] = df["malformed"].astype(bool)
    return df


def load_registration_days_df(storage, tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """
    Local registration day per word, for stores that track registration time.
    """
    list_words = getattr(storage, "list_words", None)
    if list_words is None:
        return pd.DataFrame({"item_id": [], "created_day": pd.to_datetime([])})

    words = list_words()
    return pd.DataFrame({
        "item_id": [w.id for w in words],
        "created_day": pd.to_datetime(
            [pd.Timestamp(to_local_date(w.created_at, tz)) for w in words]
        ),
    })
