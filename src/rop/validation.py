"""
Validation errors: the itemized (field, message) entries of a failure.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    Immutable (identifier, error_message) pair.

    Contents are not validated; empty strings are allowed. Structural
    equality and hashing make duplicates collapse when errors are combined.

    >>> ValidationError("Email", "invalid") == ValidationError("Email", "invalid")
    True
    """

    identifier: str
    error_message: str

    @staticmethod
    def create(identifier: str, error_message: str) -> ValidationError:
        return ValidationError(identifier=identifier, error_message=error_message)

    @staticmethod
    def empty() -> tuple[ValidationError, ...]:
        """The present-but-empty error list used by non-validation failures."""
        return ()
