"""
Service layer to assemble analytics dashboards per constant.
"""

from __future__ import annotations

from core.analytics.constants import ACCURACY_TREND_WINDOW, CONSTANT_LABELS
from core.analytics.metrics import (
    build_day_index,
    compute_accuracy_trend,
    compute_best_correct,
    compute_daily_practice_minutes,
    compute_longest_streak,
    compute_mean_accuracy,
)
from core.analytics.queries import load_sessions_df
from core.analytics.types import ConstantDashboardData
from core.digits.constants import ConstantKind
from core.digits.store import SessionStore


def build_constant_dashboard(store: SessionStore, constant: ConstantKind) -> ConstantDashboardData:
    """
    Build all KPI values and series needed by the analytics page for a constant.
    """
    constant = ConstantKind(constant)
    sessions_df = load_sessions_df(store, constant)
    day_index = build_day_index(sessions_df)

    total_seconds = float(sessions_df["duration_seconds"].sum()) if not sessions_df.empty else 0.0

    return ConstantDashboardData(
        constant=constant,
        label=CONSTANT_LABELS[constant.slug],
        session_count=len(sessions_df),
        best_correct=compute_best_correct(sessions_df),
        longest_streak=compute_longest_streak(sessions_df),
        mean_accuracy=compute_mean_accuracy(sessions_df),
        total_practice_hours=total_seconds / 3600.0,
        practice_daily_minutes=compute_daily_practice_minutes(sessions_df, day_index),
        accuracy_trend=compute_accuracy_trend(sessions_df, ACCURACY_TREND_WINDOW),
    )
