"""
Pydantic models for the persisted session format.

These models define the JSON shape of stored transcripts and of the
per-constant history export files (`<slug>_sessions.json`).
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from core.digits.constants import ConstantKind
from core.digits.summary import SessionSummary
from core.digits.tokens import DigitToken, PAUSE, PauseToken, TranscriptToken


# ---- Transcript tokens ----

class TokenRecord(BaseModel):
    """A tagged transcript token."""
    kind: Literal["digit", "pause"]
    symbol: Optional[str] = Field(None, pattern=r"^[0-9]$", description="Digit symbol (digit tokens only)")
    correct: Optional[bool] = Field(None, description="Grading result (digit tokens only)")

    @model_validator(mode="after")
    def _check_digit_fields(self) -> "TokenRecord":
        if self.kind == "digit" and (self.symbol is None or self.correct is None):
            raise ValueError("digit tokens need both symbol and correct")
        return self

    @classmethod
    def from_token(cls, token: TranscriptToken) -> "TokenRecord":
        if isinstance(token, DigitToken):
            return cls(kind="digit", symbol=token.symbol, correct=token.correct)
        if isinstance(token, PauseToken):
            return cls(kind="pause")
        raise TypeError(f"Unknown transcript token: {token!r}")

    def to_token(self) -> TranscriptToken:
        if self.kind == "digit":
            return DigitToken(symbol=self.symbol, correct=self.correct)
        return PAUSE


# ---- Session summaries ----

class SessionSummaryRecord(BaseModel):
    """Serialized SessionSummary."""
    record_id: str
    constant: str = Field(..., description="Constant slug (pi, phi, e)")
    started_at: datetime
    duration_seconds: float = Field(..., ge=0)
    digits_recited: int = Field(..., ge=0)
    correct: int = Field(..., ge=0)
    wrong: int = Field(..., ge=0)
    pauses: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=1)
    auto_ended: bool = False
    tokens: list[TokenRecord] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: SessionSummary) -> "SessionSummaryRecord":
        return cls(
            record_id=summary.record_id,
            constant=summary.constant.slug,
            started_at=summary.started_at,
            duration_seconds=summary.duration_seconds,
            digits_recited=summary.digits_recited,
            correct=summary.correct,
            wrong=summary.wrong,
            pauses=summary.pauses,
            accuracy=summary.accuracy,
            auto_ended=summary.auto_ended,
            tokens=[TokenRecord.from_token(t) for t in summary.tokens],
        )

    def to_summary(self) -> SessionSummary:
        return SessionSummary(
            record_id=self.record_id,
            constant=ConstantKind.from_slug(self.constant),
            started_at=self.started_at,
            duration_seconds=self.duration_seconds,
            digits_recited=self.digits_recited,
            correct=self.correct,
            wrong=self.wrong,
            pauses=self.pauses,
            accuracy=self.accuracy,
            auto_ended=self.auto_ended,
            tokens=tuple(t.to_token() for t in self.tokens),
        )


class SessionHistoryFile(BaseModel):
    """Contents of a per-constant history export, newest first."""
    constant: str
    sessions: list[SessionSummaryRecord] = Field(default_factory=list)
