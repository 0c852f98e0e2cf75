"""
Constants for analytics dashboards.
"""

from __future__ import annotations

from typing import Final

from core.digits.constants import TAB_ORDER


CONSTANT_LABELS: Final[dict[str, str]] = {
    kind.slug: f"{kind.tab_label} ({kind.symbol})"
    for kind in TAB_ORDER
}

SESSION_COLUMNS: Final[list[str]] = [
    "record_id",
    "started_at",
    "duration_seconds",
    "digits_recited",
    "correct",
    "wrong",
    "pauses",
    "accuracy",
    "longest_streak",
    "auto_ended",
    "day_utc",
]

# Sessions averaged in the rolling accuracy trend
ACCURACY_TREND_WINDOW: Final[int] = 5
