"""
Session Statistics UI

Renders live counters for the active session.
"""

import streamlit as st

from core.digits import StateSnapshot
from core.digits.formatting import format_accuracy


def render_digit_counter(snapshot: StateSnapshot) -> None:
    """Large yellow count of digits recited so far."""
    st.markdown(
        f"<div style='font-size:6em; font-weight:700; color:#eab308; line-height:1;'>"
        f"{snapshot.digits_recited}</div>",
        unsafe_allow_html=True
    )


def render_session_stats(snapshot: StateSnapshot) -> None:
    """
    Render correct / wrong / pauses / accuracy boxes.
    """
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Correct", snapshot.correct_count)
    with col2:
        st.metric("Wrong", snapshot.wrong_count)
    with col3:
        st.metric("Pauses", snapshot.pause_count)
    with col4:
        st.metric("Accuracy", format_accuracy(snapshot.accuracy))
