"""Tests for target sequences and constant identifiers."""

import pytest

from core.digits import ConstantKind, EmptyTargetSequenceError, get_target_sequence, sequence_length
from core.digits.sequences import validate_sequence


@pytest.mark.parametrize(
    "kind, prefix",
    [
        (ConstantKind.PI, "3141592653"),
        (ConstantKind.PHI, "1618033988"),
        (ConstantKind.E, "2718281828"),
    ],
)
def test_sequences_start_with_known_digits(kind, prefix):
    sequence = get_target_sequence(kind)
    assert "".join(sequence[:10]) == prefix
    assert all(len(d) == 1 and d.isdigit() for d in sequence)
    assert sequence_length(kind) == len(sequence)


def test_sequence_is_cached_and_immutable():
    first = get_target_sequence(ConstantKind.PI)
    assert first is get_target_sequence(ConstantKind.PI)
    assert isinstance(first, tuple)


def test_validate_sequence():
    assert validate_sequence("314") == ("3", "1", "4")
    with pytest.raises(EmptyTargetSequenceError):
        validate_sequence("")
    with pytest.raises(ValueError):
        validate_sequence(["3", "x"])


def test_constant_identifiers():
    assert ConstantKind.PHI.slug == "phi"
    assert ConstantKind.PHI.symbol == "φ"
    assert ConstantKind.PHI.tab_label == "Gold"
    assert ConstantKind.E.file_name == "e_sessions.json"
    assert ConstantKind.from_slug("pi") is ConstantKind.PI
    assert ConstantKind.from_slug("π") is ConstantKind.PI
    assert ConstantKind.from_slug("PHI") is ConstantKind.PHI
    with pytest.raises(ValueError):
        ConstantKind.from_slug("tau")
