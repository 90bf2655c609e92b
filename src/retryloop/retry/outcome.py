"""
Retry outcome tracking.

This module defines the StopReason taxonomy and the RetryOutcome dataclass,
the single terminal value produced by every retry run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from retryloop.retry.exceptions import RetryExhausted


class StopReason(str, Enum):
    """
    Why a retry run stopped without succeeding.

    Closed taxonomy: a successful run has no stop reason at all.
    """

    TIMEOUT_EXCEEDED = "timeout_exceeded"
    MAX_TRIES_EXCEEDED = "max_tries_exceeded"


@dataclass(frozen=True)
class RetryOutcome:
    """
    Terminal result of one retry run.

    Exactly one outcome is created per run, at the moment the engine decides
    to stop, and it is never mutated afterwards.

    Attributes:
        value: Return value of the successful attempt (None on failure)
        stop_reason: None on success, otherwise why the run stopped
        last_error: Error raised by the most recent failing attempt, or None
            if no attempt failed
        attempts: Number of times the operation was invoked
        elapsed_ms: Wall-clock time from start of the run to the decision (ms)
    """

    value: Any = None
    stop_reason: Optional[StopReason] = None
    last_error: Optional[BaseException] = None
    attempts: int = 0
    elapsed_ms: int = 0

    def __post_init__(self) -> None:
        """Validate outcome invariants."""
        if self.stop_reason is None and self.last_error is not None:
            raise ValueError("a successful outcome must not carry last_error")

        if self.stop_reason is not None and self.value is not None:
            raise ValueError("a failed outcome must not carry a value")

        if self.attempts < 0:
            raise ValueError("attempts must be >= 0")

        if self.elapsed_ms < 0:
            raise ValueError("elapsed_ms must be >= 0")

    @property
    def succeeded(self) -> bool:
        return self.stop_reason is None

    def unwrap(self) -> Any:
        """
        Return the successful value or raise.

        Raises:
            RetryExhausted: The run stopped on max tries or timeout. The last
                attempt's error, if any, is chained as ``__cause__``.
        """
        if self.succeeded:
            return self.value
        raise RetryExhausted(self) from self.last_error


def is_timeout(result: Union[StopReason, RetryOutcome, None]) -> bool:
    """True if the run stopped because the time budget ran out."""
    if isinstance(result, RetryOutcome):
        result = result.stop_reason
    return result == StopReason.TIMEOUT_EXCEEDED


def is_max_tries_reached(result: Union[StopReason, RetryOutcome, None]) -> bool:
    """True if the run stopped because the attempt budget ran out."""
    if isinstance(result, RetryOutcome):
        result = result.stop_reason
    return result == StopReason.MAX_TRIES_EXCEEDED
