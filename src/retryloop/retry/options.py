"""
Retry options built from functional overrides.

A RetryOptions record starts from fixed defaults and is shaped by an ordered
list of small override functions, each setting exactly one field:

    >>> opts = build_options(max_tries(3), delay(0.5), on_retry(print))
    >>> opts.max_tries, opts.delay, opts.timeout
    (3, 0.5, 5.0)

Overrides are applied strictly in the order given, so a later override of
the same field wins. Nothing is validated: degenerate values such as
``max_tries(0)`` or a negative delay are accepted and handled by the engine.
"""

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from retryloop.retry.channel import OutcomeChannel

DEFAULT_DELAY = 0.0
DEFAULT_MAX_TRIES = 5
DEFAULT_TIMEOUT = 5.0
DEFAULT_NAME = "operation"

Duration = Union[int, float, timedelta]
ErrorCallback = Callable[[Optional[BaseException]], None]


@dataclass(frozen=True)
class RetryOptions:
    """
    Settings for a single retry run.

    Frozen once built; the engine reads it but never changes it.

    Attributes:
        delay: Seconds to sleep after a failing attempt
        max_tries: Maximum number of attempts before giving up
        timeout: Wall-clock budget for the whole run in seconds (0 disables)
        on_retry: Called with the error after each failing attempt
        on_max_tries_reached: Called once when the attempt budget runs out
        on_timeout: Called once when the time budget runs out
        channel: Caller-supplied outcome channel (one is created if None)
        name: Label bound into the run's log events
    """

    delay: float = DEFAULT_DELAY
    max_tries: int = DEFAULT_MAX_TRIES
    timeout: float = DEFAULT_TIMEOUT
    on_retry: Optional[ErrorCallback] = None
    on_max_tries_reached: Optional[ErrorCallback] = None
    on_timeout: Optional[ErrorCallback] = None
    channel: Optional["OutcomeChannel"] = None
    name: str = DEFAULT_NAME

    @property
    def timeout_enabled(self) -> bool:
        return self.timeout > 0


RetryOverride = Callable[[RetryOptions], RetryOptions]


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def delay(value: Duration) -> RetryOverride:
    """Set how long to sleep between a failing attempt and the next one."""
    seconds = _seconds(value)
    return lambda options: replace(options, delay=seconds)


def max_tries(value: int) -> RetryOverride:
    """Set the maximum number of attempts."""
    return lambda options: replace(options, max_tries=value)


def timeout(value: Duration) -> RetryOverride:
    """Set the total time budget for the run; 0 disables the timeout."""
    seconds = _seconds(value)
    return lambda options: replace(options, timeout=seconds)


def on_retry(callback: Optional[ErrorCallback]) -> RetryOverride:
    """Set the callback invoked with the error after every failing attempt."""
    return lambda options: replace(options, on_retry=callback)


def on_max_tries_reached(callback: Optional[ErrorCallback]) -> RetryOverride:
    """Set the callback invoked with the last error once max tries is reached."""
    return lambda options: replace(options, on_max_tries_reached=callback)


def on_timeout(callback: Optional[ErrorCallback]) -> RetryOverride:
    """Set the callback invoked with the last error once the run times out."""
    return lambda options: replace(options, on_timeout=callback)


def channel(outcome_channel: Optional["OutcomeChannel"]) -> RetryOverride:
    """
    Set the channel the outcome is delivered to.

    Use this to hand the engine a channel created up front; otherwise the
    engine creates one and returns it.
    """
    return lambda options: replace(options, channel=outcome_channel)


def name(label: str) -> RetryOverride:
    return lambda options: replace(options, name=label)


def build_options(*overrides: RetryOverride) -> RetryOptions:
    """
    Build RetryOptions from the defaults and apply all overrides in order.

    Args:
        *overrides: Override functions, e.g. ``max_tries(3)``

    Returns:
        Frozen RetryOptions
    """
    options = RetryOptions()
    for override in overrides:
        options = override(options)
    return options
