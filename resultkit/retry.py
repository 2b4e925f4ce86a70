"""Retry policy recognized by try_ and try_async."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resultkit.config import Backoff, get_settings


def _default_delay_ms() -> float:
    return get_settings().retry.delay_ms


def _default_backoff() -> Backoff:
    return get_settings().retry.backoff


class RetryPolicy(BaseModel):
    """
    How many times to attempt an operation and how long to wait in between.

    Attributes:
        times: Total number of attempts, including the first one.
        delay_ms: Base delay between attempts in milliseconds.
        backoff: "constant" waits delay_ms every time; "exponential"
            doubles the wait after each failed attempt.

    Example:
        >>> policy = RetryPolicy(times=3, delay_ms=10, backoff="exponential")
        >>> [policy.delay_for(n) for n in (1, 2)]
        [10.0, 20.0]
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    times: int = Field(ge=1)
    delay_ms: float = Field(default_factory=_default_delay_ms, ge=0, alias="delayMs")
    backoff: Backoff = Field(default_factory=_default_backoff)

    def delay_for(self, attempt: int) -> float:
        """
        Return the wait in milliseconds after a failed attempt.

        Args:
            attempt: 1-based number of the attempt that just failed.

        Returns:
            Delay before the next attempt, in milliseconds.
        """
        if self.backoff == "exponential":
            return float(self.delay_ms * 2 ** (attempt - 1))
        return float(self.delay_ms)

    @property
    def delays(self) -> list[float]:
        """Delays applied between consecutive attempts, in order."""
        return [self.delay_for(attempt) for attempt in range(1, self.times)]

    @classmethod
    def coerce(cls, value: RetryPolicy | Mapping[str, Any] | None) -> RetryPolicy:
        """
        Build a policy from a RetryPolicy, a plain mapping or None.

        None means a single attempt with no retry.

        Raises:
            pydantic.ValidationError: If the mapping is not a valid policy.
        """
        if value is None:
            return cls(times=1)
        if isinstance(value, RetryPolicy):
            return value
        return cls.model_validate(dict(value))
