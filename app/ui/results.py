"""
Session Results UI
"""

from __future__ import annotations

import streamlit as st

from app.ui.transcript import render_transcript
from core.digits import SessionSummary
from core.digits.formatting import format_accuracy, format_duration, format_started_at


def render_results(summary: SessionSummary) -> None:
    """Render the full result of one finished session."""
    st.markdown("### Session Results")
    st.caption(f"{summary.constant.symbol} • {format_started_at(summary.started_at)}")
    if summary.auto_ended:
        st.info("Session ended automatically after too many wrong digits.")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Recited", summary.digits_recited)
    with col2:
        st.metric("Correct", summary.correct)
    with col3:
        st.metric("Wrong", summary.wrong)
    with col4:
        st.metric("Pauses", summary.pauses)

    st.markdown(
        f"**Accuracy: {format_accuracy(summary.accuracy)} • Time: {format_duration(summary.duration_seconds)}**"
    )
    st.markdown("#### Transcript")
    render_transcript(summary.tokens, height=160)
