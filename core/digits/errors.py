"""
Error types raised by the digit trainer.

Stale digit events (arriving after a session ended) are not errors and are
dropped silently by the lifecycle controller.
"""


class DigitTrainerError(Exception):
    """Base class for digit trainer errors."""


class InvalidSessionTransition(DigitTrainerError, RuntimeError):
    """A lifecycle operation was requested from a state that does not allow it."""


class EmptyTargetSequenceError(DigitTrainerError, ValueError):
    """A session was requested against a target sequence with no digits."""


class StoreUnavailableError(DigitTrainerError, RuntimeError):
    """The session store could not complete a read or write."""
