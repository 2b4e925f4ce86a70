"""
Exception capture: turn raising code into Results.

try_ and try_async are the boundary between exception-based code and
Result-based code. Any Exception raised by the wrapped operation becomes an
Err, either through a caller-supplied catch handler or wrapped in an
UnhandledException. An optional retry policy re-runs the operation before
giving up.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any, overload

from resultkit.errors import UnhandledException
from resultkit.logging import get_logger
from resultkit.result import Err, Ok, Result, _resolve
from resultkit.retry import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

logger = get_logger(__name__)

type RetryOption = RetryPolicy | Mapping[str, Any] | None


def _classify[E](
    exc: Exception, catch: Callable[[Exception], E] | None
) -> E | UnhandledException:
    """Map a captured exception to the error carried by the Err."""
    if catch is not None:
        return catch(exc)
    return UnhandledException(cause=exc)


def _log_failed_attempt(
    operation: Callable[..., Any],
    policy: RetryPolicy,
    attempt: int,
    exc: Exception,
) -> None:
    if attempt < policy.times:
        logger.debug(
            "Operation failed, retrying",
            operation=getattr(operation, "__qualname__", repr(operation)),
            attempt=attempt,
            times=policy.times,
            delay_ms=policy.delay_for(attempt),
            error=str(exc),
        )
    elif policy.times > 1:
        logger.warning(
            "Operation failed after all retry attempts",
            operation=getattr(operation, "__qualname__", repr(operation)),
            times=policy.times,
            error=str(exc),
        )


@overload
def try_[T](
    operation: Callable[[], T],
    *,
    catch: None = None,
    retry: RetryOption = None,
) -> Result[T, UnhandledException]: ...
@overload
def try_[T, E](
    operation: Callable[[], T],
    *,
    catch: Callable[[Exception], E],
    retry: RetryOption = None,
) -> Result[T, E]: ...
def try_(
    operation: Callable[[], Any],
    *,
    catch: Callable[[Exception], Any] | None = None,
    retry: RetryOption = None,
) -> Result[Any, Any]:
    """
    Call operation and capture its outcome as a Result.

    Args:
        operation: Zero-argument callable that may raise.
        catch: Maps a raised exception to the Err payload. Without it the
            exception is wrapped in an UnhandledException.
        retry: Retry policy, as a RetryPolicy or a mapping such as
            ``{"times": 3, "delay_ms": 10, "backoff": "exponential"}``.

    Returns:
        Ok with the return value, or Err with the last attempt's error.

    Raises:
        pydantic.ValidationError: If retry is not a valid policy.
    """
    policy = RetryPolicy.coerce(retry)
    # No wait follows the final attempt.
    for attempt, delay_ms in enumerate([*policy.delays, 0.0], start=1):
        try:
            return Ok(operation())
        except Exception as e:
            error = _classify(e, catch)
            _log_failed_attempt(operation, policy, attempt, e)
        if delay_ms > 0:
            time.sleep(delay_ms / 1000)
    return Err(error)


@overload
async def try_async[T](
    operation: Callable[[], Awaitable[T] | T],
    *,
    catch: None = None,
    retry: RetryOption = None,
) -> Result[T, UnhandledException]: ...
@overload
async def try_async[T, E](
    operation: Callable[[], Awaitable[T] | T],
    *,
    catch: Callable[[Exception], E],
    retry: RetryOption = None,
) -> Result[T, E]: ...
async def try_async(
    operation: Callable[[], Awaitable[Any] | Any],
    *,
    catch: Callable[[Exception], Any] | None = None,
    retry: RetryOption = None,
) -> Result[Any, Any]:
    """
    Await operation and capture its outcome as a Result.

    The async counterpart of try_. Exceptions raised while creating or
    awaiting the awaitable are captured the same way; cancellation is not.
    Waits between attempts use asyncio.sleep, so other tasks keep running.

    Args:
        operation: Zero-argument callable returning an awaitable. A plain
            return value is taken as already resolved.
        catch: Maps a raised exception to the Err payload.
        retry: Retry policy, as a RetryPolicy or a mapping.

    Returns:
        Ok with the awaited value, or Err with the last attempt's error.

    Raises:
        pydantic.ValidationError: If retry is not a valid policy.
    """
    policy = RetryPolicy.coerce(retry)
    # No wait follows the final attempt.
    for attempt, delay_ms in enumerate([*policy.delays, 0.0], start=1):
        try:
            return Ok(await _resolve(operation()))
        except Exception as e:
            error = _classify(e, catch)
            _log_failed_attempt(operation, policy, attempt, e)
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
    return Err(error)
