"""
Retry engine exceptions.

Only two situations are reported as exceptions: a run that cannot start
because no operation was supplied, and misuse of the one-shot outcome
channel. Stop reasons (max tries, timeout) are data on the RetryOutcome.
RetryExhausted exists for callers that prefer exceptions and is raised only
when they explicitly unwrap a failed outcome.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retryloop.retry.outcome import RetryOutcome


class RetryError(Exception):
    """
    Base exception for all retryloop errors.

    Allows callers to catch any library error with a single except clause.
    Errors raised by the retried operation itself are never wrapped in this
    type; they travel on the outcome as ``last_error``.
    """


class OperationMissingError(RetryError):
    """
    Raised when the operation to retry was not supplied.

    This is a configuration error: it is raised synchronously while setting
    up the engine, before any attempt, callback or delivery happens.
    """

    def __init__(self, message: str = "an operation to retry must be provided"):
        super().__init__(message)


class ChannelClosedError(RetryError):
    """
    Raised on misuse of a one-shot OutcomeChannel.

    Either a second outcome was delivered to a channel that already holds
    one, or a receiver waited on a channel that was closed without ever
    receiving an outcome (e.g. the run task was cancelled).
    """


class RetryExhausted(RetryError):
    """
    Raised by ``RetryOutcome.unwrap()`` when the run did not succeed.

    Attributes:
        outcome: The failed RetryOutcome
        stop_reason: Why the run stopped (max tries or timeout)
        last_error: Error from the most recent failing attempt, if any
    """

    def __init__(self, outcome: "RetryOutcome") -> None:
        self.outcome = outcome
        self.stop_reason = outcome.stop_reason
        self.last_error = outcome.last_error

        reason = outcome.stop_reason.value if outcome.stop_reason else "unknown"
        super().__init__(
            f"Retry stopped ({reason}) after {outcome.attempts} attempts. "
            f"Last error: {type(outcome.last_error).__name__ if outcome.last_error else None}"
        )
