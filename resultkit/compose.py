"""
Generator-based composition of Result-returning steps.

A producer is a generator function that yields Results and receives the
unwrapped Ok values back, so a sequence of fallible steps reads as
straight-line code. The first Err stops the producer and becomes the
overall outcome.

Example:
    >>> def steps():
    ...     a = yield ok(1)
    ...     b = yield ok(a + 1)
    ...     return ok(a + b)
    ...
    >>> gen(steps)
    Ok(3)

With gen_async, steps may also yield awaitables that resolve to Results,
and a context object can be handed to the producer:

    >>> def load(ctx):
    ...     user = yield ctx.repository.fetch_user(ctx.user_id)
    ...     return ok(user.name)
    ...
    >>> result = await gen_async(load, ctx)  # doctest: +SKIP
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, overload

from resultkit.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator

_NO_CONTEXT: Any = object()


def _start(
    producer: Callable[..., Generator[Any, Any, Any]], context: Any
) -> Generator[Any, Any, Any]:
    steps = producer() if context is _NO_CONTEXT else producer(context)
    if not inspect.isgenerator(steps):
        msg = f"gen() expected a generator function, got {type(steps).__name__}"
        raise TypeError(msg)
    return steps


def _check_result(value: object, where: str) -> Result[Any, Any]:
    if not isinstance(value, (Ok, Err)):
        msg = f"gen() producer {where} {type(value).__name__}, expected a Result"
        raise TypeError(msg)
    return value


@overload
def gen[T, E](
    producer: Callable[[], Generator[Result[Any, E], Any, Result[T, E]]],
) -> Result[T, E]: ...
@overload
def gen[C, T, E](
    producer: Callable[[C], Generator[Result[Any, E], Any, Result[T, E]]],
    context: C,
) -> Result[T, E]: ...
def gen(
    producer: Callable[..., Generator[Any, Any, Any]],
    context: Any = _NO_CONTEXT,
) -> Result[Any, Any]:
    """
    Run a producer, feeding Ok values back and stopping at the first Err.

    Args:
        producer: Generator function yielding Results and returning a Result.
        context: Optional object passed to the producer as its only argument.

    Returns:
        The first yielded Err, or the Result the producer returns.

    Raises:
        TypeError: If the producer yields or returns something other than
            a Result.
    """
    steps = _start(producer, context)
    try:
        sent: Any = None
        while True:
            try:
                yielded = steps.send(sent)
            except StopIteration as stop:
                return _check_result(stop.value, "returned")

            step = _check_result(yielded, "yielded")
            if isinstance(step, Err):
                return step
            sent = step.value
    finally:
        steps.close()


@overload
async def gen_async[T, E](
    producer: Callable[
        [], Generator[Result[Any, E] | Awaitable[Result[Any, E]], Any, Result[T, E]]
    ],
) -> Result[T, E]: ...
@overload
async def gen_async[C, T, E](
    producer: Callable[
        [C], Generator[Result[Any, E] | Awaitable[Result[Any, E]], Any, Result[T, E]]
    ],
    context: C,
) -> Result[T, E]: ...
async def gen_async(
    producer: Callable[..., Generator[Any, Any, Any]],
    context: Any = _NO_CONTEXT,
) -> Result[Any, Any]:
    """
    Async version of gen.

    Each yielded item may be a Result or an awaitable resolving to one;
    awaitables are awaited before the Result is inspected. An exception
    raised by an awaitable is thrown back into the producer at its yield.
    The producer itself stays a plain generator function, since async
    generators cannot return a value.

    Args:
        producer: Generator function yielding Results or awaitables of them.
        context: Optional object passed to the producer as its only argument.

    Returns:
        The first Err encountered, or the Result the producer returns.

    Raises:
        TypeError: If a step or the outcome is not a Result.
    """
    steps = _start(producer, context)
    try:
        sent: Any = None
        failure: Exception | None = None
        while True:
            try:
                if failure is None:
                    yielded = steps.send(sent)
                else:
                    yielded = steps.throw(failure)
            except StopIteration as stop:
                outcome = stop.value
                if inspect.isawaitable(outcome):
                    outcome = await outcome
                return _check_result(outcome, "returned")
            failure = None

            if inspect.isawaitable(yielded):
                try:
                    yielded = await yielded
                except Exception as e:
                    # Re-raised at the producer's yield so it can handle it.
                    failure = e
                    continue
            step = _check_result(yielded, "yielded")
            if isinstance(step, Err):
                return step
            sent = step.value
    finally:
        steps.close()
