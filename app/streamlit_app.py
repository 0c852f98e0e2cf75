"""
Constant Recitation Trainer - Main App

Streamlit UI for drilling the digits of e, phi and pi.
"""

import streamlit as st

from app.router import PAGES
from app.state import ensure_session_state
from core.digits import is_test_mode
from core.logger import setup_logger


# ---- Page Setup ----

st.set_page_config(
    page_title="Digit Trainer",
    page_icon="π",
    layout="wide"
)


@st.cache_resource
def _init_logging():
    """Configure logging once per server process."""
    setup_logger()


_init_logging()
ensure_session_state()


# ---- Main App ----

def main():
    """Main app entry point."""
    if is_test_mode():
        st.warning("⚠️ **TEST MODE** - Using test_digit_sessions (set TEST_MODE=false in .env for production)")

    tabs = st.tabs([page.title for page in PAGES])
    for tab, page in zip(tabs, PAGES):
        with tab:
            page.render()


if __name__ == "__main__":
    main()
