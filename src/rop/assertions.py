"""
Test assertions for results.

Expressive assert helpers that produce clear failure messages.

Usage in tests:
    from rop import ResultAssertions, StatusCode

    def test_register_user():
        result = register(valid_command)
        user = ResultAssertions.assert_success(result)
        assert user.email == "alice@example.com"

    def test_invalid_email():
        result = register(bad_command)
        ResultAssertions.assert_failure(result, StatusCode.BAD_REQUEST)
        ResultAssertions.assert_validation_error(result, "Email")
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar, Union

from rop.result import Result, TypedResult
from rop.status import StatusCode
from rop.validation import ValidationError

T = TypeVar("T")

AnyResult = Union[Result, TypedResult[Any]]


def _describe(result: AnyResult) -> str:
    errors = ", ".join(
        f"{e.identifier}: {e.error_message}" for e in result.validation_errors or ()
    )
    return f"{result.status_code} {result.message!r} [{errors}]"


class ResultAssertions:
    """Expressive test assertions for Result and TypedResult values."""

    @staticmethod
    def assert_success(result: AnyResult, message: str = "") -> Any:
        """
        Assert the result is a success and return its payload (None when untyped).

            user = ResultAssertions.assert_success(result)
        """
        context = f" ({message})" if message else ""
        assert result.is_success(), (
            f"Expected success but got failure {_describe(result)}{context}"
        )
        if isinstance(result, TypedResult):
            return result.ensure_value()
        return None

    @staticmethod
    def assert_failure(
        result: AnyResult,
        expected_status: Optional[StatusCode] = None,
        message: str = "",
    ) -> tuple[ValidationError, ...]:
        """
        Assert the result is a failure, optionally checking its status code.

        Returns the failure's validation errors (possibly empty).

            errors = ResultAssertions.assert_failure(result, StatusCode.BAD_REQUEST)
        """
        context = f" ({message})" if message else ""
        assert result.is_failure(), (
            f"Expected failure but got success {result!r}{context}"
        )
        if expected_status is not None:
            assert result.status_code == expected_status, (
                f"Expected status {expected_status} "
                f"but got {_describe(result)}{context}"
            )
        return result.validation_errors or ()

    @staticmethod
    def assert_failure_message_contains(result: AnyResult, substring: str) -> None:
        """Assert that the failure message contains the given substring (case-insensitive)."""
        assert result.is_failure(), f"Expected failure but got success {result!r}"
        assert substring.lower() in result.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {result.message!r}"
        )

    @staticmethod
    def assert_failure_message_equals(result: AnyResult, expected_message: str) -> None:
        """Assert that the failure message exactly equals the expected message."""
        assert result.is_failure(), f"Expected failure but got success {result!r}"
        assert result.message == expected_message, (
            f"Expected failure message {expected_message!r} "
            f"but got {result.message!r}"
        )

    @staticmethod
    def assert_validation_error(
        result: AnyResult,
        identifier: str,
        error_message: Optional[str] = None,
    ) -> ValidationError:
        """
        Assert the failure carries a validation error for `identifier`.

        Optionally also checks its message. Returns the first matching error.
        """
        errors = ResultAssertions.assert_failure(result)
        matches = [e for e in errors if e.identifier == identifier]
        assert matches, (
            f"Expected a validation error for {identifier!r} but got {_describe(result)}"
        )
        if error_message is not None:
            assert any(e.error_message == error_message for e in matches), (
                f"Expected {identifier!r} error {error_message!r} "
                f"but got {[e.error_message for e in matches]!r}"
            )
        return matches[0]

    @staticmethod
    def assert_success_value(result: TypedResult[T], expected_value: Any) -> None:
        """Assert the result is a success with the specific payload."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
