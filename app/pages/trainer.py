"""
Trainer page rendering (one per constant).
"""

from __future__ import annotations

import streamlit as st

from app.session_controller import end_session, reset_session, start_session, submit_digits
from app.state import get_controller, get_store
from app.ui import (
    render_digit_counter,
    render_keypad,
    render_results,
    render_session_log,
    render_session_stats,
    render_text_entry,
    render_transcript,
)
from core.digits import ConstantKind, is_test_mode


def render_trainer_page(kind: ConstantKind) -> None:
    """
    Render the live trainer, session log and controls for one constant.
    """
    controller = get_controller(kind)
    store = get_store()

    trainer_col, log_col = st.columns([3, 2], gap="large")

    with trainer_col:
        st.markdown(f"## {kind.symbol} Trainer")
        _render_input(kind, controller.active)
        snapshot = controller.snapshot()
        render_digit_counter(snapshot)
        render_transcript(snapshot.transcript)

    with log_col:
        selected = render_session_log(kind, store)
        if selected is not None:
            st.session_state.viewed_records[kind.slug] = selected
            st.session_state.show_results[kind.slug] = True

    render_session_stats(controller.snapshot())
    _render_controls(kind, controller.active)
    _render_results_panel(kind)

    if is_test_mode():
        st.caption("TEST MODE - Using test_digit_sessions")


def _render_input(kind: ConstantKind, active: bool) -> None:
    pressed = render_keypad(kind.slug, disabled=not active)
    if pressed is not None:
        submit_digits(kind, pressed)

    text = render_text_entry(kind.slug, disabled=not active)
    if text is not None:
        submit_digits(kind, text)


def _render_controls(kind: ConstantKind, active: bool) -> None:
    col1, col2 = st.columns(2)

    with col1:
        label = "End Session" if active else "Start Session"
        if st.button(label, key=f"{kind.slug}_toggle", type="primary", use_container_width=True):
            if active:
                end_session(kind)
            else:
                start_session(kind)
            st.rerun()

    with col2:
        if st.button("Reset", key=f"{kind.slug}_reset", use_container_width=True):
            reset_session(kind)
            st.rerun()


def _render_results_panel(kind: ConstantKind) -> None:
    if not st.session_state.show_results.get(kind.slug):
        return

    summary = st.session_state.viewed_records.get(kind.slug)
    if summary is None:
        outcome = st.session_state.last_outcomes.get(kind.slug)
        if outcome is None:
            return
        summary = outcome.summary
        if not outcome.persisted:
            st.warning(f"This session was not saved: {outcome.persist_error}")

    st.divider()
    render_results(summary)
    if st.button("Close", key=f"{kind.slug}_close_results"):
        st.session_state.show_results[kind.slug] = False
        st.session_state.viewed_records.pop(kind.slug, None)
        st.rerun()
