"""Tests for display helpers."""

from datetime import datetime, timezone

import pytest

from core.digits import PAUSE, DigitToken
from core.digits.formatting import (
    format_accuracy,
    format_duration,
    format_started_at,
    transcript_segments,
    transcript_text,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "00:00:00.000"),
        (3725.5, "01:02:05.500"),
        (59.9994, "00:00:59.999"),
        (-3, "00:00:00.000"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_accuracy_rounds():
    assert format_accuracy(0.7) == "70%"
    assert format_accuracy(2 / 3) == "67%"
    assert format_accuracy(0.0) == "0%"


def test_format_accuracy_rounds_halves_up():
    assert format_accuracy(0.625) == "63%"
    assert format_accuracy(0.125) == "13%"
    assert format_accuracy(1.0) == "100%"


def test_format_started_at():
    value = datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)
    assert format_started_at(value) == "Oct 19, 2026 14:05"


def test_transcript_segments_color_each_token_kind():
    tokens = [DigitToken("3", True), PAUSE, DigitToken("2", False)]

    segments = transcript_segments(tokens)

    assert [(s.text, s.color) for s in segments] == [("3", "green"), ("–", "orange"), ("2", "red")]
    assert transcript_text(tokens) == "3–2"


def test_transcript_segments_reject_unknown_tokens():
    with pytest.raises(TypeError):
        transcript_segments(["3"])
