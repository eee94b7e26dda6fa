"""
Result types: the core of Railway-Oriented Programming.

A Result is the outcome of an operation: a message, a StatusCode and an
optional tuple of ValidationErrors. A TypedResult[T] embeds a Result and adds
an optional payload. Expected failures travel as data; callers branch on
is_success()/is_failure() instead of catching exceptions.

    ┌───────────┐    bind      ┌───────────┐    bind      ┌──────────┐
    │ validate  │──Success─────│  enrich   │──Success─────│ persist  │──→ TypedResult[T]
    │           │              │           │              │          │
    └─────┬─────┘              └─────┬─────┘              └─────┬────┘
          │ Failure                  │ Failure                  │ Failure
          └──────────────────────────┴──────────────────────────┴──→ same message/status/errors

State rules:
  - Result:         success ⇔ validation_errors is None
                    (an empty tuple is a failure without itemized errors,
                    e.g. NotFound, Unauthorized, Conflict)
  - TypedResult[T]: success ⇔ outcome is a success and data is not None;
                    no data without errors, and no data alongside errors
                    (both raise InvalidResultStatus)

Every combinator either returns its input unchanged or builds a new
instance; nothing is ever mutated. Exceptions raised by callbacks are not
caught.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    NamedTuple,
    Optional,
    TypeVar,
    Union,
)

from rop.config import get_settings
from rop.exceptions import InvalidResultStatus, NullResultValueException
from rop.status import StatusCode
from rop.validation import ValidationError

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

# (predicate, identifier, error message) as accepted by TypedResult.validate
Validator = tuple[Callable[[Any], bool], str, str]

MaybeAwaitable = Union[R, Awaitable[R]]


class ResultParts(NamedTuple):
    """The (validation_errors, message, status_code) triple shared by both result kinds."""

    validation_errors: Optional[tuple[ValidationError, ...]]
    message: str
    status_code: StatusCode


async def resolve(value: MaybeAwaitable[R]) -> R:
    """Await `value` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


def _as_errors(errors: Union[ValidationError, Iterable[ValidationError]]) -> tuple[ValidationError, ...]:
    if isinstance(errors, ValidationError):
        return (errors,)
    return tuple(errors)


def _message(message: Optional[str], default: str) -> str:
    return default if message is None else message


@dataclass(frozen=True, slots=True)
class Result:
    """
    Untyped outcome of an operation.

    Build instances through the factories, not the constructor:

        >>> Result.success().is_success()
        True
        >>> Result.not_found().validation_errors
        ()
        >>> Result.bad_request(ValidationError("Email", "invalid")).status_code.id
        400
    """

    message: str
    status_code: StatusCode
    validation_errors: Optional[tuple[ValidationError, ...]] = None

    def __post_init__(self) -> None:
        if self.validation_errors is not None and not isinstance(self.validation_errors, tuple):
            object.__setattr__(self, "validation_errors", tuple(self.validation_errors))

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return self.validation_errors is None

    def is_failure(self) -> bool:
        return not self.is_success()

    def deconstruct(self) -> ResultParts:
        return ResultParts(self.validation_errors, self.message, self.status_code)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def from_parts(parts: ResultParts) -> Result:
        return Result(
            message=parts.message,
            status_code=parts.status_code,
            validation_errors=parts.validation_errors,
        )

    @staticmethod
    def success(message: Optional[str] = None) -> Result:
        """Successful outcome. Defaults to the configured success message ("OK")."""
        return Result(_message(message, get_settings().messages.success), StatusCode.OK)

    @staticmethod
    def bad_request(
        errors: Union[ValidationError, Iterable[ValidationError]],
        message: Optional[str] = None,
    ) -> Result:
        """
        Validation failure carrying one error or a sequence of errors.

        An empty sequence still produces a failure, with zero itemized errors.
        """
        return Result(
            _message(message, get_settings().messages.bad_request),
            StatusCode.BAD_REQUEST,
            _as_errors(errors),
        )

    @staticmethod
    def not_found(message: Optional[str] = None) -> Result:
        return Result(
            _message(message, get_settings().messages.not_found),
            StatusCode.NOT_FOUND,
            ValidationError.empty(),
        )

    @staticmethod
    def unauthorized(message: Optional[str] = None) -> Result:
        return Result(
            _message(message, get_settings().messages.unauthorized),
            StatusCode.UNAUTHORIZED,
            ValidationError.empty(),
        )

    @staticmethod
    def password_change_required(message: str) -> Result:
        """PreconditionRequired failure. The message is mandatory."""
        return Result(message, StatusCode.PRECONDITION_REQUIRED, ValidationError.empty())

    @staticmethod
    def conflict(message: Optional[str] = None) -> Result:
        return Result(
            _message(message, get_settings().messages.conflict),
            StatusCode.CONFLICT,
            ValidationError.empty(),
        )

    # ──────────────────────── Combinators ────────────────────────

    def next(self, continuation: Callable[[], Result]) -> Result:
        """
        Sequence another untyped step. Short-circuits on failure.

            Result.success().next(send_email).next(audit)
        """
        if self.is_failure():
            return self
        return continuation()

    async def next_async(self, continuation: Callable[[], MaybeAwaitable[Result]]) -> Result:
        """Like next(), awaiting the continuation when it is asynchronous."""
        if self.is_failure():
            return self
        return await resolve(continuation())

    def with_value(self, value: U) -> TypedResult[U]:
        """
        Attach a payload to this outcome, keeping message/status/errors.

        Raises TypeError if `value` is None. A failing outcome stays failing
        and the value is dropped.
        """
        if value is None:
            raise TypeError("Value attached to a result must not be None")
        return TypedResult(self, value if self.is_success() else None)

    def tap_if_failed(self, action: Callable[[], Any]) -> Result:
        """Run `action` only on failure. Returns this result unchanged."""
        if self.is_failure():
            action()
        return self

    def match(
        self,
        on_success: Callable[[], R],
        on_failure: Callable[[Result], R],
    ) -> R:
        """Apply one of two functions depending on the state."""
        if self.is_success():
            return on_success()
        return on_failure(self)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()


@dataclass(frozen=True, slots=True)
class TypedResult(Generic[T]):
    """
    Outcome carrying an optional payload of type T.

    Composition rather than inheritance: `outcome` holds the untyped
    message/status/errors, `data` the payload. Message, status_code and
    validation_errors read through to the outcome.

        >>> TypedResult.success(42).map(lambda x: x * 2).ensure_value()
        84
        >>> TypedResult.not_found("no such user").map(lambda u: u.name).status_code.id
        404
    """

    outcome: Result
    data: Optional[T] = None

    def __post_init__(self) -> None:
        has_errors = self.outcome.validation_errors is not None
        if self.data is None and not has_errors:
            raise InvalidResultStatus()
        if self.data is not None and has_errors:
            raise InvalidResultStatus("A failed TypedResult cannot carry a value")

    # ──────────────────────── Introspection ────────────────────────

    @property
    def message(self) -> str:
        return self.outcome.message

    @property
    def status_code(self) -> StatusCode:
        return self.outcome.status_code

    @property
    def validation_errors(self) -> Optional[tuple[ValidationError, ...]]:
        return self.outcome.validation_errors

    def is_success(self) -> bool:
        return self.outcome.is_success() and self.data is not None

    def is_failure(self) -> bool:
        return not self.is_success()

    def ensure_value(self) -> T:
        """
        Return the payload. Raises NullResultValueException when there is none.

        Failures never carry data, so this also guards reading a failure's value.
        """
        if self.data is None:
            raise NullResultValueException()
        return self.data

    def deconstruct(self) -> ResultParts:
        return self.outcome.deconstruct()

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def from_parts(parts: ResultParts, data: Optional[U] = None) -> TypedResult[U]:
        return TypedResult(Result.from_parts(parts), data)

    @staticmethod
    def success(value: U, message: Optional[str] = None) -> TypedResult[U]:
        """
        Successful outcome wrapping `value`.

        Raises InvalidResultStatus if `value` is None.
        """
        return TypedResult(
            Result(_message(message, get_settings().messages.typed_success), StatusCode.OK),
            value,
        )

    @staticmethod
    async def success_async(pending: Awaitable[U], message: Optional[str] = None) -> TypedResult[U]:
        """success() over a pending value. Errors of `pending` propagate."""
        return TypedResult.success(await pending, message)

    @staticmethod
    def of(value: U) -> TypedResult[U]:
        """Explicit form of "a bare value is a successful result"."""
        return TypedResult.success(value)

    @staticmethod
    def from_error(error: ValidationError) -> TypedResult[Any]:
        """Explicit form of "a bare ValidationError is a BadRequest"."""
        return TypedResult.bad_request(error)

    @staticmethod
    def bad_request(
        errors: Union[ValidationError, Iterable[ValidationError]],
        message: Optional[str] = None,
    ) -> TypedResult[Any]:
        return TypedResult(Result.bad_request(errors, message))

    @staticmethod
    def not_found(message: Optional[str] = None) -> TypedResult[Any]:
        return TypedResult(Result.not_found(message))

    @staticmethod
    def unauthorized(message: Optional[str] = None) -> TypedResult[Any]:
        return TypedResult(Result.unauthorized(message))

    @staticmethod
    def conflict(message: Optional[str] = None) -> TypedResult[Any]:
        return TypedResult(Result.conflict(message))

    @staticmethod
    def ensure_found(value: Optional[U], not_found_message: str) -> TypedResult[U]:
        """
        NotFound(not_found_message) when `value` is None, Success(value) otherwise.

            TypedResult.ensure_found(repo.get(user_id), "User not found")
        """
        if value is None:
            return TypedResult.not_found(not_found_message)
        return TypedResult.success(value)

    @staticmethod
    async def ensure_found_async(
        pending: Awaitable[Optional[U]],
        not_found_message: str,
    ) -> TypedResult[U]:
        """
        ensure_found() over a pending value.

        Cancellation or errors of `pending` propagate; they are not turned into results.
        """
        return TypedResult.ensure_found(await pending, not_found_message)

    @staticmethod
    def create(value: Optional[U], error_message: str) -> TypedResult[U]:
        """Same as ensure_found()."""
        return TypedResult.ensure_found(value, error_message)

    @staticmethod
    def validate(value: Optional[U], *validators: Validator) -> TypedResult[U]:
        """
        Run every (predicate, identifier, message) validator against `value`.

        All validators execute; nothing short-circuits. When every predicate
        passes the value comes back as a success, otherwise a single
        BadRequest holds the distinct errors of the failing validators.
        A None value fails every validator without calling its predicate;
        with no validators it is a BadRequest with zero itemized errors.

            TypedResult.validate(
                user,
                (lambda u: "@" in u.email, "Email", "Email is invalid"),
                (lambda u: len(u.password) >= 8, "Password", "Password is too short"),
            )
        """
        checks = [
            TypedResult._check(value, predicate, identifier, message)
            for predicate, identifier, message in validators
        ]
        if not checks:
            if value is None:
                return TypedResult.bad_request(ValidationError.empty())
            return TypedResult.success(value)
        return TypedResult.combine(*checks)

    @staticmethod
    def _check(
        value: Optional[U],
        predicate: Callable[[U], bool],
        identifier: str,
        message: str,
    ) -> TypedResult[U]:
        if value is not None and predicate(value):
            return TypedResult.success(value)
        return TypedResult.bad_request(ValidationError(identifier, message))

    @staticmethod
    def combine(*results: TypedResult[U]) -> TypedResult[U]:
        """
        Merge results of the same value into one.

        All successful: a success wrapping the first value. Otherwise a BadRequest
        whose errors are the ordered, de-duplicated union of the failures' errors.
        """
        if not results:
            raise ValueError("combine() needs at least one result")
        failures = [r for r in results if r.is_failure()]
        if not failures:
            return TypedResult.success(results[0].ensure_value())

        errors = list(dict.fromkeys(error for r in failures for error in r.validation_errors or ()))
        return TypedResult.bad_request(errors)

    # ──────────────────────── Core Transformations ────────────────────────

    def _propagate(self) -> TypedResult[Any]:
        # Failing copy for any payload type, sharing the immutable outcome.
        return TypedResult(self.outcome)

    def map(self, mapper: Callable[[T], U]) -> TypedResult[U]:
        """
        Transform the payload, keeping message/status. Short-circuits on failure.

            TypedResult.success(5).map(lambda x: x * 2)   # → data 10
            TypedResult.not_found().map(lambda x: x * 2)  # → same NotFound, mapper not called
        """
        if self.is_failure():
            return self._propagate()
        return TypedResult(self.outcome, mapper(self.ensure_value()))

    def map_to(self, value: U) -> TypedResult[U]:
        """Replace the payload with a literal value. Raises TypeError if `value` is None."""
        if value is None:
            raise TypeError("Replacement value must not be None")
        if self.is_failure():
            return self._propagate()
        return TypedResult(self.outcome, value)

    def untyped(self) -> Result:
        """Drop the payload, keeping message/status/errors."""
        return self.outcome

    def bind(self, binder: Callable[[T], TypedResult[U]]) -> TypedResult[U]:
        """
        Chain a TypedResult-returning function. Short-circuits on failure.

        On success the binder's result is returned as is; its own success or
        failure is authoritative.
        """
        if self.is_failure():
            return self._propagate()
        return binder(self.ensure_value())

    def then(self, continuation: Callable[[], TypedResult[U]]) -> TypedResult[U]:
        """
        bind() for a step that does not need the current value.

            find_user(user_id).then(load_settings)
        """
        if self.is_failure():
            return self._propagate()
        return continuation()

    def bind_untyped(self, binder: Callable[[T], Result]) -> Result:
        """Chain a function returning an untyped Result. Short-circuits on failure."""
        if self.is_failure():
            return self.outcome
        return binder(self.ensure_value())

    def bind_with_value(
        self, binder: Callable[[T], TypedResult[U]]
    ) -> tuple[TypedResult[U], Optional[T]]:
        """
        bind() that also hands back the input value, or None on failure.

            saved, user = find_user(user_id).bind_with_value(load_orders)
        """
        if self.is_failure():
            return self._propagate(), None
        value = self.ensure_value()
        return binder(value), value

    def bind_untyped_with_value(
        self, binder: Callable[[T], Result]
    ) -> tuple[Result, Optional[T]]:
        """bind_untyped() that also hands back the input value, or None on failure."""
        if self.is_failure():
            return self.outcome, None
        value = self.ensure_value()
        return binder(value), value

    def bind_and_conserve(
        self, binder: Callable[[T], Union[Result, TypedResult[U]]]
    ) -> TypedResult[Any]:
        """
        Run a follow-up step without losing the current value.

        If the step returns an untyped Result, the output keeps the current
        value; if it returns a TypedResult[U], the output carries the pair
        (current value, step value). Message and status come from the step.
        """
        if self.is_failure():
            return self._propagate()
        value = self.ensure_value()
        return self._conserve(value, binder(value))

    @staticmethod
    def _conserve(value: Any, secondary: Union[Result, TypedResult[Any]]) -> TypedResult[Any]:
        if isinstance(secondary, TypedResult):
            if secondary.is_failure():
                return TypedResult(secondary.outcome)
            return TypedResult(secondary.outcome, (value, secondary.ensure_value()))
        if secondary.is_failure():
            return TypedResult(secondary)
        return TypedResult(secondary, value)

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: Union[ValidationError, str, Result],
        message: Optional[str] = None,
    ) -> TypedResult[T]:
        """
        Assert a condition on the payload. Short-circuits on existing failure.

        Accepts a ValidationError, an identifier plus message, or a failing
        Result. A failing predicate discards the value and yields
        BadRequest(error), or the given Result's message/status/errors.

            TypedResult.success(order).ensure(lambda o: o.total > 0, "Total", "Total must be positive")
            TypedResult.success(user).ensure(lambda u: u.active, Result.unauthorized("Account disabled"))
        """
        if self.is_failure():
            return self
        passed = predicate(self.ensure_value())
        return self if passed else _rejection(error, message)

    def ensure_all(self, *validators: Validator) -> TypedResult[T]:
        """validate() the payload of a successful result. Short-circuits on failure."""
        if self.is_failure():
            return self
        checked = TypedResult.validate(self.ensure_value(), *validators)
        return self if checked.is_success() else checked

    # ──────────────────────── Side Effects ────────────────────────

    def tap(self, action: Callable[[T], Any]) -> TypedResult[T]:
        """
        Run a side effect on the payload without altering the result.

            result.tap(lambda user: log.info("user.created", user_id=user.id))
        """
        if self.is_success():
            action(self.ensure_value())
        return self

    def tap_if_failed(self, action: Callable[[], Any]) -> TypedResult[T]:
        """Run `action` only on failure. Returns this result unchanged."""
        if self.is_failure():
            action()
        return self

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Result], R],
    ) -> R:
        """
        Apply one of two functions depending on the state.

            result.match(
                on_success=lambda user: f"Hello {user.name}",
                on_failure=lambda failed: f"Error: {failed.message}",
            )
        """
        if self.is_success():
            return on_success(self.ensure_value())
        return on_failure(self.outcome)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(self, mapper: Callable[[T], MaybeAwaitable[U]]) -> TypedResult[U]:
        """
        map() whose mapper may be a coroutine function.

            result = await TypedResult.success(user_id).map_async(fetch_profile)
        """
        if self.is_failure():
            return self._propagate()
        return TypedResult(self.outcome, await resolve(mapper(self.ensure_value())))

    async def bind_async(
        self, binder: Callable[[T], MaybeAwaitable[TypedResult[U]]]
    ) -> TypedResult[U]:
        """bind() whose binder may be a coroutine function."""
        if self.is_failure():
            return self._propagate()
        return await resolve(binder(self.ensure_value()))

    async def then_async(
        self, continuation: Callable[[], MaybeAwaitable[TypedResult[U]]]
    ) -> TypedResult[U]:
        if self.is_failure():
            return self._propagate()
        return await resolve(continuation())

    async def bind_untyped_async(self, binder: Callable[[T], MaybeAwaitable[Result]]) -> Result:
        if self.is_failure():
            return self.outcome
        return await resolve(binder(self.ensure_value()))

    async def bind_and_conserve_async(
        self, binder: Callable[[T], MaybeAwaitable[Union[Result, TypedResult[U]]]]
    ) -> TypedResult[Any]:
        if self.is_failure():
            return self._propagate()
        value = self.ensure_value()
        return self._conserve(value, await resolve(binder(value)))

    async def ensure_async(
        self,
        predicate: Callable[[T], MaybeAwaitable[bool]],
        error: Union[ValidationError, str, Result],
        message: Optional[str] = None,
    ) -> TypedResult[T]:
        """ensure() whose predicate may be a coroutine function."""
        if self.is_failure():
            return self
        passed = await resolve(predicate(self.ensure_value()))
        return self if passed else _rejection(error, message)

    async def tap_async(self, action: Callable[[T], MaybeAwaitable[Any]]) -> TypedResult[T]:
        if self.is_success():
            await resolve(action(self.ensure_value()))
        return self

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()

    def __repr__(self) -> str:
        if self.is_success():
            return f"TypedResult({self.status_code}, data={self.data!r})"
        errors = len(self.validation_errors or ())
        return f"TypedResult({self.status_code}: {self.message!r}, errors={errors})"


def _as_error(error: Union[ValidationError, str], message: Optional[str]) -> ValidationError:
    if isinstance(error, ValidationError):
        return error
    if message is None:
        raise TypeError("A message is required when an error identifier is given")
    return ValidationError(error, message)


def _rejection(error: Union[ValidationError, str, Result], message: Optional[str]) -> TypedResult[Any]:
    if isinstance(error, Result):
        # A success here has neither data nor errors: InvalidResultStatus.
        return TypedResult.from_parts(error.deconstruct())
    return TypedResult.bad_request(_as_error(error, message))
