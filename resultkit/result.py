"""
Result pattern for explicit error handling.

This module provides a Result type that makes error handling explicit
by returning either an Ok or an Err value instead of raising exceptions.

Example:
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return err("Division by zero")
    ...     return ok(a / b)
    ...
    >>> result = divide(10, 2).map(lambda x: x * 2)
    >>> match result:
    ...     case Ok(value):
    ...         print(f"Result: {value}")
    ...     case Err(error):
    ...         print(f"Error: {error}")
    Result: 10.0

The module-level transformers accept either ``(result, fn)`` or ``(fn)``;
the second form returns a reusable function:

    >>> double = map(lambda x: x * 2)
    >>> double(ok(5))
    Ok(10)
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Never, TypeGuard, overload

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class UnwrapError(ValueError):
    """
    Raised when unwrap() is called on an Err.

    Attributes:
        error: The error payload of the Err that was unwrapped.
    """

    def __init__(self, message: str, error: object) -> None:
        super().__init__(message)
        self.error = error


async def _resolve[V](value: V | Awaitable[V]) -> V:
    """Await value if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """
    Represents a successful result containing a value.

    Attributes:
        value: The success value.
    """

    value: T
    status: ClassVar[Literal["ok"]] = "ok"

    def is_ok(self) -> bool:
        """Return True if this is an Ok."""
        return True

    def is_error(self) -> bool:
        """Return False since this is an Ok."""
        return False

    def map[U](self, fn: Callable[[T], U]) -> Ok[U]:
        """
        Apply a function to the success value.

        Args:
            fn: Function to apply to the value.

        Returns:
            New Ok with the mapped value.
        """
        return Ok(fn(self.value))

    def map_error(self, _fn: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged (there is no error to map)."""
        return self

    def and_then[U, E](self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function.

        Args:
            fn: Function receiving the value and returning a Result.

        Returns:
            The Result returned by fn, unwrapped one level.
        """
        return fn(self.value)

    async def and_then_async[U, E](
        self, fn: Callable[[T], Awaitable[Result[U, E]]]
    ) -> Result[U, E]:
        """Chain an async Result-returning function."""
        return await _resolve(fn(self.value))

    def tap(self, fn: Callable[[T], object]) -> Ok[T]:
        """
        Run fn with the value for its side effect.

        Returns:
            Self unchanged.
        """
        fn(self.value)
        return self

    async def tap_async(self, fn: Callable[[T], Awaitable[object]]) -> Ok[T]:
        """Run and await fn with the value for its side effect; return self."""
        await _resolve(fn(self.value))
        return self

    def match[R](self, *, ok: Callable[[T], R], err: Callable[[Any], R]) -> R:
        """Call the ok handler with the value and return its result."""
        return ok(self.value)

    def unwrap(self, _message: str | None = None) -> T:
        """Return the success value."""
        return self.value

    def unwrap_or[U](self, _fallback: U) -> T:
        """Return the success value (ignores the fallback)."""
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized form understood by hydrate()."""
        return {"status": self.status, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """
    Represents a failed result containing an error.

    Attributes:
        error: The error value.
    """

    error: E
    status: ClassVar[Literal["error"]] = "error"

    def is_ok(self) -> bool:
        """Return False since this is an Err."""
        return False

    def is_error(self) -> bool:
        """Return True if this is an Err."""
        return True

    def map(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged (there is no value to map)."""
        return self

    def map_error[F](self, fn: Callable[[E], F]) -> Err[F]:
        """
        Apply a function to the error value.

        Args:
            fn: Function to apply to the error.

        Returns:
            New Err with the mapped error.
        """
        return Err(fn(self.error))

    def and_then(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self without calling fn (short-circuits on error)."""
        return self

    async def and_then_async(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self without calling fn (short-circuits on error)."""
        return self

    def tap(self, _fn: Callable[[Any], object]) -> Err[E]:
        """Return self without calling fn."""
        return self

    async def tap_async(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self without calling fn."""
        return self

    def match[R](self, *, ok: Callable[[Any], R], err: Callable[[E], R]) -> R:
        """Call the err handler with the error and return its result."""
        return err(self.error)

    def unwrap(self, message: str | None = None) -> Never:
        """
        Raise since this is an Err.

        Args:
            message: Message for the raised error. Defaults to one that
                includes the contained error.

        Raises:
            UnwrapError: Always, chained to the error when it is an exception.
        """
        exc = UnwrapError(message or f"Called unwrap on Err: {self.error}", self.error)
        if isinstance(self.error, BaseException):
            raise exc from self.error
        raise exc

    def unwrap_or[U](self, fallback: U) -> U:
        """Return the fallback since this is an Err."""
        return fallback

    def to_dict(self) -> dict[str, Any]:
        """Return the serialized form understood by hydrate()."""
        return {"status": self.status, "error": self.error}

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
type Result[T, E] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """
    Create an Ok result.

    Args:
        value: The success value. None is a valid value.

    Returns:
        An Ok containing the value.
    """
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """
    Create an Err result.

    Args:
        error: The error value.

    Returns:
        An Err containing the error.
    """
    return Err(error)


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Return True if result is an Ok, narrowing its type."""
    return result.status == "ok"


def is_error[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Return True if result is an Err, narrowing its type."""
    return result.status == "error"


def _dispatch(method: str, args: tuple[Any, ...]) -> Any:
    """
    Route a data-first or data-last call to the Ok/Err method.

    ``(result, fn)`` applies the method immediately; ``(fn,)`` returns a
    function that applies it to whatever result it is given later.
    """
    if len(args) == 2:
        result, fn = args
        if not isinstance(result, (Ok, Err)):
            msg = f"{method}() expected a Result, got {type(result).__name__}"
            raise TypeError(msg)
        return getattr(result, method)(fn)
    if len(args) == 1:
        (fn,) = args

        def transform(result: Result[Any, Any]) -> Any:
            return _dispatch(method, (result, fn))

        transform.__name__ = f"{method}_transform"
        return transform
    msg = f"{method}() takes a result and a function, or a function alone"
    raise TypeError(msg)


@overload
def map[T, U, E](result: Result[T, E], fn: Callable[[T], U], /) -> Result[U, E]: ...
@overload
def map[T, U, E](fn: Callable[[T], U], /) -> Callable[[Result[T, E]], Result[U, E]]: ...
def map(*args: Any) -> Any:
    """Transform the value of an Ok; pass an Err through unchanged."""
    return _dispatch("map", args)


@overload
def map_error[T, E, F](result: Result[T, E], fn: Callable[[E], F], /) -> Result[T, F]: ...
@overload
def map_error[T, E, F](
    fn: Callable[[E], F], /
) -> Callable[[Result[T, E]], Result[T, F]]: ...
def map_error(*args: Any) -> Any:
    """Transform the error of an Err; pass an Ok through unchanged."""
    return _dispatch("map_error", args)


@overload
def and_then[T, U, E, F](
    result: Result[T, E], fn: Callable[[T], Result[U, F]], /
) -> Result[U, E | F]: ...
@overload
def and_then[T, U, E, F](
    fn: Callable[[T], Result[U, F]], /
) -> Callable[[Result[T, E]], Result[U, E | F]]: ...
def and_then(*args: Any) -> Any:
    """Chain a Result-returning function onto an Ok; short-circuit an Err."""
    return _dispatch("and_then", args)


@overload
def and_then_async[T, U, E, F](
    result: Result[T, E], fn: Callable[[T], Awaitable[Result[U, F]]], /
) -> Awaitable[Result[U, E | F]]: ...
@overload
def and_then_async[T, U, E, F](
    fn: Callable[[T], Awaitable[Result[U, F]]], /
) -> Callable[[Result[T, E]], Awaitable[Result[U, E | F]]]: ...
def and_then_async(*args: Any) -> Any:
    """Async and_then: await fn's Result for an Ok; short-circuit an Err."""
    return _dispatch("and_then_async", args)


@overload
def tap[T, E](result: Result[T, E], fn: Callable[[T], object], /) -> Result[T, E]: ...
@overload
def tap[T, E](fn: Callable[[T], object], /) -> Callable[[Result[T, E]], Result[T, E]]: ...
def tap(*args: Any) -> Any:
    """Run a side effect with the value of an Ok; always return the result."""
    return _dispatch("tap", args)


@overload
def tap_async[T, E](
    result: Result[T, E], fn: Callable[[T], Awaitable[object]], /
) -> Awaitable[Result[T, E]]: ...
@overload
def tap_async[T, E](
    fn: Callable[[T], Awaitable[object]], /
) -> Callable[[Result[T, E]], Awaitable[Result[T, E]]]: ...
def tap_async(*args: Any) -> Any:
    """Await a side effect with the value of an Ok; always return the result."""
    return _dispatch("tap_async", args)


def match[T, E, R](
    result: Result[T, E],
    *,
    ok: Callable[[T], R],
    err: Callable[[E], R],
) -> R:
    """
    Call exactly one handler depending on the variant.

    Args:
        result: The result to inspect.
        ok: Called with the value of an Ok.
        err: Called with the error of an Err.

    Returns:
        Whatever the selected handler returns.
    """
    return result.match(ok=ok, err=err)


def unwrap[T, E](result: Result[T, E], message: str | None = None) -> T:
    """
    Return the value of an Ok, or raise for an Err.

    Raises:
        UnwrapError: If result is an Err.
    """
    return result.unwrap(message)


def unwrap_or[T, E, U](result: Result[T, E], fallback: U) -> T | U:
    """Return the value of an Ok, or fallback for an Err."""
    return result.unwrap_or(fallback)


def hydrate(value: object) -> Result[Any, Any] | None:
    """
    Rebuild a Result from its serialized form.

    Results lose their class when they cross a serialization boundary
    (JSON, a queue, a cache); they arrive as plain mappings like
    ``{"status": "ok", "value": 42}``.

    Args:
        value: Anything, typically freshly decoded data.

    Returns:
        The matching Ok or Err, or None if value is not a serialized Result.
    """
    if not isinstance(value, Mapping):
        return None
    status = value.get("status")
    if status == "ok" and "value" in value:
        return Ok(value["value"])
    if status == "error" and "error" in value:
        return Err(value["error"])
    return None
