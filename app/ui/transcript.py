"""
Transcript UI

Renders a color-coded transcript: green correct digits, red wrong digits,
orange dashes for pauses.
"""

from __future__ import annotations

import html
from typing import Iterable

import streamlit as st

from core.digits import TranscriptToken
from core.digits.formatting import transcript_segments


def transcript_html(tokens: Iterable[TranscriptToken]) -> str:
    spans = [
        f"<span style='color:{segment.color};'>{html.escape(segment.text)}</span>"
        for segment in transcript_segments(tokens)
    ]
    return "".join(spans)


def render_transcript(tokens: Iterable[TranscriptToken], height: int = 220) -> None:
    """
    Render a wrapping transcript in a fixed-height scroll box.
    """
    st.markdown(
        f"""
        <div style="height:{height}px; overflow-y:auto; padding:0.75rem;
                    background:rgba(0,0,0,0.05); border-radius:10px;
                    font-size:1.5em; font-family:monospace; word-break:break-all;">
            {transcript_html(tokens) or "&nbsp;"}
        </div>
        """,
        unsafe_allow_html=True
    )
