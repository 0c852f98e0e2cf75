"""
Streamlit session state and session store initialization helpers.
"""

from __future__ import annotations

import streamlit as st

from core import digits
from core.digits import ConstantKind, DigitFeed, SessionController, SessionStore, TAB_ORDER


@st.cache_resource
def get_store() -> SessionStore:
    """
    Session store shared by all browser sessions (cached per server process).
    """
    return SessionStore()


def _build_controller(kind: ConstantKind, store: SessionStore) -> SessionController:
    feed = DigitFeed()
    controller = SessionController(kind, store=store, source=feed)
    controller.on_session_end(lambda outcome, kind=kind: _record_outcome(kind, outcome))
    return controller


def _record_outcome(kind: ConstantKind, outcome: digits.SessionOutcome) -> None:
    st.session_state.last_outcomes[kind.slug] = outcome
    st.session_state.show_results[kind.slug] = True


def ensure_session_state() -> None:
    """
    Populate Streamlit session_state with defaults.
    """
    store = get_store()
    if "last_outcomes" not in st.session_state:
        st.session_state.last_outcomes = {}
    if "show_results" not in st.session_state:
        st.session_state.show_results = {}
    if "viewed_records" not in st.session_state:
        st.session_state.viewed_records = {}
    if "controllers" not in st.session_state:
        st.session_state.controllers = {
            kind.slug: _build_controller(kind, store)
            for kind in TAB_ORDER
        }


def get_controller(kind: ConstantKind) -> SessionController:
    return st.session_state.controllers[kind.slug]
