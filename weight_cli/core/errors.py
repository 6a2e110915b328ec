"""Error types raised by the weight pipeline and store."""

from __future__ import annotations


class WeightError(RuntimeError):
    """Base class for errors reported to the user by commands."""


class MalformedRecord(WeightError):
    """Raised when a stored item cannot be parsed into a record."""


class InvalidInput(WeightError):
    """Raised when user-supplied values cannot form a record."""


class EmptySeries(WeightError):
    """Raised when an operation needs at least one record."""


class StoreUnavailable(WeightError):
    """Raised when a call to the remote item store fails."""
