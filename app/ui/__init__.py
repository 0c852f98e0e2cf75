"""UI Components for the Digit Trainer"""

from app.ui.keypad import render_keypad, render_text_entry
from app.ui.results import render_results
from app.ui.session_log import render_session_log
from app.ui.session_stats import render_digit_counter, render_session_stats
from app.ui.transcript import render_transcript

__all__ = [
    "render_keypad",
    "render_text_entry",
    "render_results",
    "render_session_log",
    "render_digit_counter",
    "render_session_stats",
    "render_transcript",
]
