"""
Session Log UI

Lists stored sessions for a constant, newest first, with view, delete and
clear-all controls.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from core.digits import ConstantKind, SessionStore, SessionSummary, StoreUnavailableError
from core.digits.formatting import format_accuracy, format_duration, format_started_at


def _render_row(summary: SessionSummary) -> None:
    st.caption(f"{summary.constant.symbol} • {format_started_at(summary.started_at)}")
    st.markdown(
        f"Recited: {summary.digits_recited} • Correct: {summary.correct} • "
        f"Wrong: {summary.wrong} • Pauses: {summary.pauses}  \n"
        f"Accuracy: {format_accuracy(summary.accuracy)} • Time: {format_duration(summary.duration_seconds)}"
    )


def _apply(action) -> bool:
    """Run a store write; show a warning instead of failing the page."""
    try:
        action()
    except StoreUnavailableError as exc:
        st.warning(f"Session history unavailable: {exc}")
        return False
    return True


def render_session_log(kind: ConstantKind, store: SessionStore) -> Optional[SessionSummary]:
    """
    Render the stored sessions for a constant.

    Returns:
        The session the user asked to view, or None
    """
    header_col, clear_col = st.columns([4, 1])
    with header_col:
        st.markdown("### Session Log")
    with clear_col:
        if st.button("🗑️", key=f"{kind.slug}_clear_all", help="Clear all sessions"):
            if _apply(lambda: store.clear_all(kind)):
                st.rerun()

    try:
        summaries = store.list_all(kind)
    except StoreUnavailableError as exc:
        st.warning(f"Session history unavailable: {exc}")
        return None

    if not summaries:
        st.caption("No sessions yet.")
        return None

    selected = None
    for summary in summaries:
        with st.container(border=True):
            _render_row(summary)
            view_col, delete_col = st.columns(2)
            with view_col:
                if st.button("View", key=f"{kind.slug}_view_{summary.record_id}", use_container_width=True):
                    selected = summary
            with delete_col:
                if st.button("Delete", key=f"{kind.slug}_delete_{summary.record_id}", use_container_width=True):
                    if _apply(lambda record_id=summary.record_id: store.delete(record_id)):
                        st.rerun()
    return selected
