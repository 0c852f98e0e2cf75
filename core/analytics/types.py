"""
Types for analytics dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from core.digits.constants import ConstantKind


@dataclass(frozen=True)
class ConstantDashboardData:
    """
    Precomputed metrics and series for one constant's history.
    """
    constant: ConstantKind
    label: str
    session_count: int
    best_correct: int
    longest_streak: int
    mean_accuracy: float
    total_practice_hours: float
    practice_daily_minutes: pd.Series
    accuracy_trend: pd.Series
