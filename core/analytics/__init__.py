"""
Analytics package exports.
"""

from core.analytics.constants import CONSTANT_LABELS
from core.analytics.service import build_constant_dashboard
from core.analytics.types import ConstantDashboardData

__all__ = [
    "CONSTANT_LABELS",
    "build_constant_dashboard",
    "ConstantDashboardData",
]
