"""
Session lifecycle helpers for Streamlit app.
"""

from __future__ import annotations

import streamlit as st
from loguru import logger

from app.state import get_controller
from core.digits import ConstantKind, InvalidSessionTransition


def start_session(kind: ConstantKind) -> None:
    """
    Start a new recitation session for a constant.
    """
    controller = get_controller(kind)
    st.session_state.show_results[kind.slug] = False
    st.session_state.viewed_records.pop(kind.slug, None)
    try:
        controller.start()
    except InvalidSessionTransition:
        logger.debug(f"Start ignored; {kind.slug} session already active")


def end_session(kind: ConstantKind) -> None:
    """
    End the current session; the outcome is picked up by the end listener.
    """
    outcome = get_controller(kind).end(auto=False)
    if outcome is not None and not outcome.persisted:
        st.warning(f"Session could not be saved: {outcome.persist_error}")


def reset_session(kind: ConstantKind) -> None:
    """
    Discard the current session without saving it.
    """
    get_controller(kind).reset()
    st.session_state.show_results[kind.slug] = False
    st.session_state.last_outcomes.pop(kind.slug, None)


def submit_digits(kind: ConstantKind, text: str) -> int:
    """
    Feed typed or pasted text ("3 1 4", "three one four") to the session.

    Returns:
        Number of digits delivered
    """
    controller = get_controller(kind)
    if controller.source is None or not controller.active:
        return 0
    delivered = controller.source.push(text)
    outcome = st.session_state.last_outcomes.get(kind.slug)
    if outcome is not None and not controller.active and not outcome.persisted:
        st.warning(f"Session could not be saved: {outcome.persist_error}")
    return delivered
