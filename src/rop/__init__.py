"""
Railway-Oriented Programming (ROP) results for Python.

Expected failures are data, not exceptions: an operation returns a Result
(message, status code, validation errors) or a TypedResult[T] that also
carries a payload, and chains of steps short-circuit on the first failure.

    from rop import TypedResult, ValidationError

    def find_user(user_id: int) -> TypedResult[User]:
        return TypedResult.ensure_found(users.get(user_id), "User not found")

    result = (
        find_user(42)
        .ensure(lambda u: u.active, ValidationError("User", "User is inactive"))
        .map(lambda u: u.email)
    )
"""

from rop.result import Result, ResultParts, TypedResult, Validator
from rop.status import StatusCode
from rop.validation import ValidationError
from rop.exceptions import InvalidResultStatus, NullResultValueException, RopError
from rop.config import RopSettings, get_settings
from rop.assertions import ResultAssertions

__all__ = [
    "Result",
    "ResultParts",
    "TypedResult",
    "Validator",
    "StatusCode",
    "ValidationError",
    "RopError",
    "InvalidResultStatus",
    "NullResultValueException",
    "RopSettings",
    "get_settings",
    "ResultAssertions",
]

__version__ = "1.0.0"
