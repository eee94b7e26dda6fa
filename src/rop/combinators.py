"""
Async combinators over pending results.

The methods on Result/TypedResult need a resolved instance. The coroutine
functions here accept a result OR anything awaitable that produces one (a
coroutine, a Task, a Future), await it, then apply the same branch logic as
the matching method. Callbacks may be plain functions or coroutine functions.

Because each function returns a coroutine, chains nest without intermediate
awaits:

    user = await tap_async(
        bind_async(
            TypedResult.ensure_found_async(repo.get(user_id), "User not found"),
            load_permissions,
        ),
        audit,
    )

Execution is strictly sequential. Cancellation and errors of an awaited
input or callback propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from rop.result import MaybeAwaitable, Result, TypedResult, Validator, resolve
from rop.validation import ValidationError

T = TypeVar("T")
U = TypeVar("U")

ResultSource = Union[TypedResult[T], Awaitable[TypedResult[T]]]
UntypedSource = Union[Result, Awaitable[Result]]

__all__ = [
    "resolve",
    "map_async",
    "map_to_async",
    "untyped_async",
    "with_value_async",
    "bind_async",
    "bind_untyped_async",
    "bind_and_conserve_async",
    "then_async",
    "ensure_async",
    "ensure_value_async",
    "ensure_all_async",
    "tap_async",
    "tap_if_failed_async",
    "next_async",
    "extract_value_async",
]


# ──────────────────────── Map ────────────────────────


async def map_async(
    source: ResultSource[T], mapper: Callable[[T], MaybeAwaitable[U]]
) -> TypedResult[U]:
    """Await `source`, then TypedResult.map_async()."""
    result: TypedResult[T] = await resolve(source)
    return await result.map_async(mapper)


async def map_to_async(source: ResultSource[T], value: U) -> TypedResult[U]:
    """Await `source`, then replace the payload. Raises TypeError if `value` is None."""
    result: TypedResult[T] = await resolve(source)
    return result.map_to(value)


async def untyped_async(source: ResultSource[T]) -> Result:
    result: TypedResult[T] = await resolve(source)
    return result.untyped()


async def with_value_async(source: UntypedSource, value: U) -> TypedResult[U]:
    """Await an untyped result, then attach `value` to it."""
    result: Result = await resolve(source)
    return result.with_value(value)


# ──────────────────────── Bind ────────────────────────


async def bind_async(
    source: ResultSource[T], binder: Callable[[T], MaybeAwaitable[TypedResult[U]]]
) -> TypedResult[U]:
    """Await `source`, then chain `binder`. Short-circuits on failure."""
    result: TypedResult[T] = await resolve(source)
    return await result.bind_async(binder)


async def then_async(
    source: ResultSource[T], continuation: Callable[[], MaybeAwaitable[TypedResult[U]]]
) -> TypedResult[U]:
    """Await `source`, then run a step that ignores its value. Short-circuits on failure."""
    result: TypedResult[T] = await resolve(source)
    return await result.then_async(continuation)


async def bind_untyped_async(
    source: ResultSource[T], binder: Callable[[T], MaybeAwaitable[Result]]
) -> Result:
    result: TypedResult[T] = await resolve(source)
    return await result.bind_untyped_async(binder)


async def bind_and_conserve_async(
    source: ResultSource[T],
    binder: Callable[[T], MaybeAwaitable[Union[Result, TypedResult[U]]]],
) -> TypedResult[Any]:
    """Await `source`, then run a follow-up step keeping the current value."""
    result: TypedResult[T] = await resolve(source)
    return await result.bind_and_conserve_async(binder)


# ──────────────────────── Ensure ────────────────────────


async def ensure_async(
    source: ResultSource[T],
    predicate: Callable[[T], MaybeAwaitable[bool]],
    error: Union[ValidationError, str, Result],
    message: Optional[str] = None,
) -> TypedResult[T]:
    result: TypedResult[T] = await resolve(source)
    return await result.ensure_async(predicate, error, message)


async def ensure_value_async(
    pending: MaybeAwaitable[Optional[T]],
    predicate: Callable[[T], MaybeAwaitable[bool]],
    failure: Result,
) -> TypedResult[T]:
    """
    Await a bare value and check it.

    A None value or a failing predicate yields `failure`'s message, status
    and errors; otherwise the value comes back as a success.

        await ensure_value_async(repo.get(user_id), lambda u: u.active, Result.unauthorized())
    """
    value = await resolve(pending)
    if value is None:
        return TypedResult.from_parts(failure.deconstruct())
    return await TypedResult.success(value).ensure_async(predicate, failure)


async def ensure_all_async(source: ResultSource[T], *validators: Validator) -> TypedResult[T]:
    result: TypedResult[T] = await resolve(source)
    return result.ensure_all(*validators)


# ──────────────────────── Tap ────────────────────────


async def tap_async(
    source: ResultSource[T], action: Callable[[T], MaybeAwaitable[Any]]
) -> TypedResult[T]:
    result: TypedResult[T] = await resolve(source)
    return await result.tap_async(action)


async def tap_if_failed_async(
    source: Union[ResultSource[T], UntypedSource],
    action: Callable[[], MaybeAwaitable[Any]],
) -> Union[TypedResult[T], Result]:
    """Await `source`; on failure run `action`. Returns the awaited result unchanged."""
    result = await resolve(source)
    if result.is_failure():
        await resolve(action())
    return result


# ──────────────────────── Next ────────────────────────


async def next_async(
    source: UntypedSource, continuation: Callable[[], MaybeAwaitable[Result]]
) -> Result:
    result: Result = await resolve(source)
    return await result.next_async(continuation)


# ──────────────────────── Extraction ────────────────────────


async def extract_value_async(source: ResultSource[T]) -> tuple[TypedResult[T], Optional[T]]:
    """
    Await `source` and return it together with its payload (None on failure).

        result, user = await extract_value_async(find_user(user_id))
    """
    result: TypedResult[T] = await resolve(source)
    return result, result.data
