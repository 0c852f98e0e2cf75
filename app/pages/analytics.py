"""
Analytics page rendering.
"""

from __future__ import annotations

import streamlit as st

from app.state import get_store
from core.analytics import CONSTANT_LABELS, build_constant_dashboard
from core.digits import ConstantKind, TAB_ORDER
from core.digits.formatting import format_accuracy


LABEL_TO_KIND: dict[str, ConstantKind] = {
    CONSTANT_LABELS[kind.slug]: kind
    for kind in TAB_ORDER
}


@st.cache_data(show_spinner=False)
def _cached_dashboard(slug: str):
    return build_constant_dashboard(get_store(), ConstantKind.from_slug(slug))


def render_analytics_page() -> None:
    st.subheader("Recitation Analytics")

    selected_label = st.radio(
        "Constant",
        list(LABEL_TO_KIND),
        horizontal=True,
    )
    selected_kind = LABEL_TO_KIND[selected_label]

    if st.button("Refresh Analytics", use_container_width=False):
        _cached_dashboard.clear()
        st.rerun()

    dashboard = _cached_dashboard(selected_kind.slug)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Sessions", f"{dashboard.session_count:,}")
    with col2:
        st.metric("Best Session (Correct)", f"{dashboard.best_correct:,}")
    with col3:
        st.metric("Longest Streak", f"{dashboard.longest_streak:,}", help="Consecutive correct digits; pauses do not break a streak")
    with col4:
        st.metric("Overall Accuracy", format_accuracy(dashboard.mean_accuracy))

    st.caption(f"Total practice: {dashboard.total_practice_hours:.2f} hours")

    st.markdown("### Practice Time")
    if dashboard.practice_daily_minutes.empty:
        st.info("No sessions yet for this constant.")
    else:
        st.bar_chart(dashboard.practice_daily_minutes.rename("minutes").to_frame())

    st.markdown("### Accuracy Trend")
    if dashboard.accuracy_trend.empty:
        st.info("No sessions yet for this constant.")
    else:
        st.line_chart(dashboard.accuracy_trend.rename("accuracy").to_frame())
