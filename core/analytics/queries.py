"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

import pandas as pd

from core.analytics.constants import SESSION_COLUMNS
from core.analytics.metrics import longest_correct_streak
from core.digits.constants import ConstantKind
from core.digits.store import SessionStore


def load_sessions_df(store: SessionStore, constant: ConstantKind) -> pd.DataFrame:
    """
    Load a constant's stored sessions into a dataframe, oldest first.
    """
    summaries = store.list_all(constant)
    if not summaries:
        return pd.DataFrame(columns=SESSION_COLUMNS)

    df = pd.DataFrame(
        [
            {
                "record_id": s.record_id,
                "started_at": s.started_at,
                "duration_seconds": s.duration_seconds,
                "digits_recited": s.digits_recited,
                "correct": s.correct,
                "wrong": s.wrong,
                "pauses": s.pauses,
                "accuracy": s.accuracy,
                "longest_streak": longest_correct_streak(s.tokens),
                "auto_ended": s.auto_ended,
            }
            for s in summaries
        ]
    )
    df["started_at"] = pd.to_datetime(df["started_at"], utc=True, errors="coerce")
    df = df.dropna(subset=["started_at"])
    df["day_utc"] = df["started_at"].dt.floor("D")
    df = df.sort_values("started_at").reset_index(drop=True)
    return df[SESSION_COLUMNS]
