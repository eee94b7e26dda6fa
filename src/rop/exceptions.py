"""
Invariant violations: programming errors, never business outcomes.

Expected failures travel as data inside a Result. The exceptions here signal
that calling code broke the Result contract, so they are raised and never
converted back into a Result.
"""

from __future__ import annotations


class RopError(Exception):
    """Base exception for all rop contract violations."""


class InvalidResultStatus(RopError):
    """A typed result would carry neither data nor validation errors (or both)."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Attempted to create a TypedResult in an invalid state: provide either "
            "a non-None value or validation errors"
        )


class NullResultValueException(RopError):
    """The value of a result holding no data was read."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "The TypedResult being accessed holds no value")
