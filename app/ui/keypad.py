"""
Digit keypad UI

Renders a phone-style keypad and a free-text transcript box.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st


KEYPAD_ROWS = (
    ("1", "2", "3"),
    ("4", "5", "6"),
    ("7", "8", "9"),
    ("0",),
)


def render_keypad(key_prefix: str, disabled: bool = False) -> Optional[str]:
    """
    Render digit buttons.

    Returns:
        The pressed digit, or None if no button was clicked
    """
    pressed = None
    for row in KEYPAD_ROWS:
        cols = st.columns(3)
        offset = 1 if len(row) == 1 else 0
        for index, digit in enumerate(row):
            with cols[index + offset]:
                if st.button(digit, key=f"{key_prefix}_key_{digit}", disabled=disabled, use_container_width=True):
                    pressed = digit
    return pressed


def render_text_entry(key_prefix: str, disabled: bool = False) -> Optional[str]:
    """
    Render a form for typed or pasted transcripts ("3 1 4" or "three one four").

    Returns:
        Submitted text, or None
    """
    with st.form(key=f"{key_prefix}_text_form", clear_on_submit=True):
        text = st.text_input(
            "Digits",
            key=f"{key_prefix}_text",
            placeholder="e.g. 3 1 4 1 5 or three one four",
            disabled=disabled,
        )
        submitted = st.form_submit_button("Send", disabled=disabled)
    if submitted and text:
        return text
    return None
