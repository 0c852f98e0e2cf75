"""
Transcription adapter.

Turns recognized speech or typed text into digit events for the lifecycle
controller. Only '0'..'9' ever reaches the grading engine; everything else is
filtered here.
"""

from __future__ import annotations

import re
import threading
from datetime import datetime, timezone
from typing import Callable, Hashable, Optional

from loguru import logger


DigitCallback = Callable[[str, Optional[datetime]], object]

WORD_TO_DIGIT = {
    "zero": "0",
    "one": "1",
    "two": "2",
    "three": "3",
    "four": "4",
    "five": "5",
    "six": "6",
    "seven": "7",
    "eight": "8",
    "nine": "9",
}

_TOKEN_PATTERN = re.compile(r"[a-z]+|\d")


def map_to_digit(token: str) -> Optional[str]:
    """
    Map one recognized token to a digit symbol.

    Accepts spelled-out digits ("seven") and single numerals ("7"),
    ignoring case and surrounding whitespace.

    Returns:
        The digit symbol, or None if the token is not a digit
    """
    normalized = token.strip().lower()
    if len(normalized) == 1 and normalized.isdigit() and normalized.isascii():
        return normalized
    return WORD_TO_DIGIT.get(normalized)


def extract_digits(text: str) -> list[str]:
    """
    Split a free-form transcript into digit symbols, in order.

    "three 1 four" -> ["3", "1", "4"]; "314" -> ["3", "1", "4"].
    Unrecognized words are dropped.
    """
    digits = []
    for token in _TOKEN_PATTERN.findall(text.lower()):
        digit = map_to_digit(token)
        if digit is not None:
            digits.append(digit)
    return digits


class DigitFeed:
    """
    Push-based digit source with start/stop control.

    Text pushed while running is split into digits and delivered one by one to
    the callback given to start(). After stop(), pushes are dropped. A push
    carrying the same segment id as the previous one is ignored, which
    absorbs repeated partial results from streaming recognizers.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.Lock()
        self._callback: Optional[DigitCallback] = None
        self._last_segment: Optional[Hashable] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, on_digit: DigitCallback) -> None:
        with self._lock:
            self._callback = on_digit
            self._last_segment = None

    def stop(self) -> None:
        with self._lock:
            self._callback = None

    def push(
        self,
        text: str,
        arrival_time: Optional[datetime] = None,
        segment_id: Optional[Hashable] = None,
    ) -> int:
        """
        Deliver the digits found in text.

        Args:
            text: Recognized or typed text
            arrival_time: Arrival instant for every digit in text (defaults to now)
            segment_id: Recognizer segment identifier used for deduplication

        Returns:
            Number of digits delivered
        """
        digits = extract_digits(text)
        with self._lock:
            if segment_id is not None and segment_id == self._last_segment:
                return 0
            # A partial result without digits does not claim its segment
            if segment_id is not None and digits:
                self._last_segment = segment_id

        if arrival_time is None:
            arrival_time = self._clock()

        delivered = 0
        for digit in digits:
            # Re-read per digit: stop() may be called by the consumer mid-push
            callback = self._callback
            if callback is None:
                logger.debug(f"Digit feed stopped; dropped {len(digits) - delivered} digits")
                break
            callback(digit, arrival_time)
            delivered += 1
        return delivered
