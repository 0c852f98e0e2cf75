"""
Display helpers for sessions and transcripts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, NamedTuple

from core.digits.tokens import DigitToken, PauseToken, TranscriptToken


CORRECT_COLOR = "green"
WRONG_COLOR = "red"
PAUSE_COLOR = "orange"
PAUSE_GLYPH = "–"


class TranscriptSegment(NamedTuple):
    text: str
    color: str


def format_duration(seconds: float) -> str:
    """
    Format a duration as HH:MM:SS.mmm.

    >>> format_duration(3725.5)
    '01:02:05.500'
    """
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"


def format_started_at(value: datetime) -> str:
    """Medium date plus short time, e.g. 'Oct 19, 2026 14:05'."""
    return f"{value.strftime('%b')} {value.day}, {value.year} {value.strftime('%H:%M')}"


def format_accuracy(accuracy: float) -> str:
    """Whole percent, halves rounded up (0.625 -> '63%')."""
    return f"{int(accuracy * 100 + 0.5)}%"


def transcript_segments(tokens: Iterable[TranscriptToken]) -> list[TranscriptSegment]:
    """
    Color-coded pieces of a transcript: green correct digits, red wrong
    digits, orange pause dashes.
    """
    segments = []
    for token in tokens:
        if isinstance(token, DigitToken):
            segments.append(TranscriptSegment(token.symbol, CORRECT_COLOR if token.correct else WRONG_COLOR))
        elif isinstance(token, PauseToken):
            segments.append(TranscriptSegment(PAUSE_GLYPH, PAUSE_COLOR))
        else:
            raise TypeError(f"Unknown transcript token: {token!r}")
    return segments


def transcript_text(tokens: Iterable[TranscriptToken]) -> str:
    """Plain-text transcript (digits and pause dashes)."""
    return "".join(segment.text for segment in transcript_segments(tokens))
