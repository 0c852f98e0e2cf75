"""
Transcript tokens.

A transcript is an append-only sequence of two token kinds:
- DigitToken: a graded digit (correct or wrong)
- PauseToken: a silence between digits longer than the pause threshold

Every consumer (counting, rendering, persistence) handles both kinds and
rejects anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Union


@dataclass(frozen=True)
class DigitToken:
    """A graded recitation event."""
    symbol: str
    correct: bool


@dataclass(frozen=True)
class PauseToken:
    """Marker for an inter-digit gap above the pause threshold."""


PAUSE = PauseToken()

TranscriptToken = Union[DigitToken, PauseToken]


class TokenCounts(NamedTuple):
    correct: int
    wrong: int
    pauses: int

    @property
    def digits(self) -> int:
        return self.correct + self.wrong


def count_tokens(tokens: Iterable[TranscriptToken]) -> TokenCounts:
    """
    Count correct digits, wrong digits and pauses in a transcript.

    Raises:
        TypeError: If a token is neither a DigitToken nor a PauseToken
    """
    correct = wrong = pauses = 0
    for token in tokens:
        if isinstance(token, DigitToken):
            if token.correct:
                correct += 1
            else:
                wrong += 1
        elif isinstance(token, PauseToken):
            pauses += 1
        else:
            raise TypeError(f"Unknown transcript token: {token!r}")
    return TokenCounts(correct, wrong, pauses)


def token_to_dict(token: TranscriptToken) -> dict:
    """Tagged form used for persistence and export."""
    if isinstance(token, DigitToken):
        return {"kind": "digit", "symbol": token.symbol, "correct": token.correct}
    if isinstance(token, PauseToken):
        return {"kind": "pause"}
    raise TypeError(f"Unknown transcript token: {token!r}")


def token_from_dict(data: dict) -> TranscriptToken:
    """
    Inverse of token_to_dict.

    Raises:
        ValueError: If the tag is missing or unknown
    """
    kind = data.get("kind")
    if kind == "digit":
        return DigitToken(symbol=str(data["symbol"]), correct=bool(data["correct"]))
    if kind == "pause":
        return PAUSE
    raise ValueError(f"Unknown token kind: {kind!r}")
