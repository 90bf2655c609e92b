"""
Retry engine with fixed delay and attempt/time budgets.

This package retries a fallible zero-argument operation until it succeeds,
runs out of attempts, or runs out of time:

1. **Options**: Frozen RetryOptions built from functional overrides
2. **Engine**: Attempt loop, stop-condition checks, fixed delay
3. **Outcome**: Single terminal result (value, or stop reason + last error)
4. **Channel**: One-shot delivery of the outcome to the caller

Main Components:
    - RetryEngine: Runs one retry loop for one operation
    - RetryOutcome: Immutable terminal result of a run
    - StopReason: MAX_TRIES_EXCEEDED or TIMEOUT_EXCEEDED
    - OutcomeChannel: Write-once handle the outcome is delivered to

Usage:
    >>> from retryloop.retry import spawn, max_tries, delay
    >>> channel = spawn(fetch_config, max_tries(3), delay(0.2))
    >>> outcome = await channel.receive()
"""

from retryloop.retry.channel import OutcomeChannel
from retryloop.retry.engine import RetryEngine, retry, run_blocking, spawn
from retryloop.retry.exceptions import (
    ChannelClosedError,
    OperationMissingError,
    RetryError,
    RetryExhausted,
)
from retryloop.retry.options import (
    RetryOptions,
    RetryOverride,
    build_options,
    channel,
    delay,
    max_tries,
    name,
    on_max_tries_reached,
    on_retry,
    on_timeout,
    timeout,
)
from retryloop.retry.outcome import (
    RetryOutcome,
    StopReason,
    is_max_tries_reached,
    is_timeout,
)

__all__ = [
    "RetryEngine",
    "spawn",
    "retry",
    "run_blocking",
    "RetryOptions",
    "RetryOverride",
    "build_options",
    "delay",
    "max_tries",
    "timeout",
    "on_retry",
    "on_max_tries_reached",
    "on_timeout",
    "channel",
    "name",
    "RetryOutcome",
    "StopReason",
    "is_timeout",
    "is_max_tries_reached",
    "OutcomeChannel",
    "RetryError",
    "OperationMissingError",
    "ChannelClosedError",
    "RetryExhausted",
]
