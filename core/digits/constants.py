"""
Digit Trainer Constants and Parameters

All tunable grading parameters and the constant identifiers in one place.
"""

from __future__ import annotations

from enum import Enum


# ---- Drilled constants ----

class ConstantKind(str, Enum):
    """A drilled mathematical constant. Values are the display symbols."""
    E = "e"
    PHI = "φ"
    PI = "π"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def slug(self) -> str:
        """ASCII identifier, safe for file names and database keys."""
        return _SLUGS[self]

    @property
    def tab_label(self) -> str:
        return _TAB_LABELS[self]

    @property
    def file_name(self) -> str:
        return f"{self.slug}_sessions.json"

    @classmethod
    def from_slug(cls, value: str) -> "ConstantKind":
        """
        Resolve a constant from its slug, symbol or member name.

        Raises:
            ValueError: If the identifier matches no constant
        """
        if isinstance(value, cls):
            return value
        needle = str(value).strip()
        for kind in cls:
            if needle in (kind.slug, kind.value) or needle.upper() == kind.name:
                return kind
        raise ValueError(f"Unknown constant: {value!r}")


_SLUGS = {
    ConstantKind.E: "e",
    ConstantKind.PHI: "phi",
    ConstantKind.PI: "pi",
}

_TAB_LABELS = {
    ConstantKind.E: "Euler",
    ConstantKind.PHI: "Gold",
    ConstantKind.PI: "Pi",
}

# Tab order in the trainer UI
TAB_ORDER = (ConstantKind.E, ConstantKind.PHI, ConstantKind.PI)


# ---- Grading parameters ----

PAUSE_THRESHOLD_SECONDS = 2.0  # Gap between digits (strictly greater) that inserts a pause
LOOKAHEAD_WINDOW = 2           # Target positions searched per digit (absorbs one dropped digit)
AUTO_END_WRONG_LIMIT = 10      # Session ends automatically once wrong digits reach this


DIGIT_SYMBOLS = frozenset("0123456789")
