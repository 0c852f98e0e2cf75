"""
Metric computations for analytics dashboards.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from core.digits.tokens import DigitToken, PauseToken, TranscriptToken


def longest_correct_streak(tokens: Iterable[TranscriptToken]) -> int:
    """
    Longest run of consecutive correct digits in a transcript.

    Pauses do not break a run; wrong digits do.
    """
    best = current = 0
    for token in tokens:
        if isinstance(token, DigitToken):
            current = current + 1 if token.correct else 0
            best = max(best, current)
        elif not isinstance(token, PauseToken):
            raise TypeError(f"Unknown transcript token: {token!r}")
    return best


def build_day_index(sessions_df: pd.DataFrame) -> pd.DatetimeIndex:
    """
    Build a dense UTC day index spanning the session range.
    """
    if sessions_df.empty:
        return pd.DatetimeIndex([], tz="UTC")
    start = sessions_df["day_utc"].min()
    end = sessions_df["day_utc"].max()
    return pd.date_range(start=start, end=end, freq="D", unit=start.unit)


def compute_best_correct(sessions_df: pd.DataFrame) -> int:
    """
    Most correct digits in a single session.
    """
    if sessions_df.empty:
        return 0
    return int(sessions_df["correct"].max())


def compute_longest_streak(sessions_df: pd.DataFrame) -> int:
    if sessions_df.empty:
        return 0
    return int(sessions_df["longest_streak"].max())


def compute_mean_accuracy(sessions_df: pd.DataFrame) -> float:
    """
    Accuracy over all digits recited across sessions (not a mean of ratios).
    """
    if sessions_df.empty:
        return 0.0
    recited = int(sessions_df["digits_recited"].sum())
    if recited == 0:
        return 0.0
    return float(sessions_df["correct"].sum()) / recited


def compute_daily_practice_minutes(
    sessions_df: pd.DataFrame,
    day_index: pd.DatetimeIndex
) -> pd.Series:
    """
    Minutes of recitation per UTC day, zero-filled across the day index.
    """
    if sessions_df.empty or len(day_index) == 0:
        return pd.Series(dtype="float64")

    daily = sessions_df.groupby("day_utc")["duration_seconds"].sum() / 60.0
    return daily.reindex(day_index, fill_value=0.0).astype("float64")


def compute_accuracy_trend(sessions_df: pd.DataFrame, window: int) -> pd.Series:
    """
    Rolling mean of per-session accuracy, indexed by session start.
    """
    if sessions_df.empty:
        return pd.Series(dtype="float64")

    series = sessions_df.set_index("started_at")["accuracy"].astype("float64")
    return series.rolling(window=window, min_periods=1).mean()
