"""
Simple page router for Streamlit tabs.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable

from app.pages.analytics import render_analytics_page
from app.pages.trainer import render_trainer_page
from core.digits import TAB_ORDER


@dataclass(frozen=True)
class AppPage:
    title: str
    render: Callable[[], None]


PAGES = [
    *(AppPage(title=kind.tab_label, render=partial(render_trainer_page, kind)) for kind in TAB_ORDER),
    AppPage(title="Analytics", render=render_analytics_page),
]
