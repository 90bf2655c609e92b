"""
Retry engine with fixed delay, attempt budget and time budget.

The RetryEngine repeatedly invokes a fallible operation until it succeeds,
``max_tries`` attempts have been made, or ``timeout`` seconds have elapsed,
whichever comes first. It produces exactly one RetryOutcome per run and
delivers it to a one-shot OutcomeChannel.

Stop conditions are checked before every attempt, max tries first:
    1. attempts >= max_tries  -> StopReason.MAX_TRIES_EXCEEDED
    2. deadline has passed    -> StopReason.TIMEOUT_EXCEEDED
When both budgets run out at the same time the run reports max tries.

The timeout is only checked between attempts. An operation that is still
running when the deadline passes is awaited to completion; the engine never
cancels it.

Usage:
    channel = spawn(fetch, max_tries(3), delay(0.5))   # background task
    outcome = await channel.receive()

    outcome = await retry(fetch, timeout(10))          # inline
    outcome = run_blocking(fetch)                      # no event loop
"""

import asyncio
import inspect
import time
from typing import Any, Callable, Optional

import structlog

from retryloop.config import settings
from retryloop.monitoring import (
    retry_attempts_total,
    retry_run_duration_seconds,
    retry_runs_total,
)
from retryloop.retry.channel import OutcomeChannel
from retryloop.retry.exceptions import (
    ChannelClosedError,
    OperationMissingError,
    RetryError,
)
from retryloop.retry.options import ErrorCallback, RetryOverride, build_options
from retryloop.retry.outcome import RetryOutcome, StopReason

logger = structlog.get_logger(__name__)

Operation = Callable[[], Any]

# Strong references to spawned runs so they are not garbage collected mid-run
_background_tasks: set[asyncio.Task] = set()


class RetryEngine:
    """
    One retry run of one operation.

    The operation takes no arguments and either returns a value (success)
    or raises an Exception (failed attempt). Plain callables are executed in
    a worker thread so the event loop stays responsive; coroutine functions
    are awaited directly. Either way each attempt runs to completion before
    the engine looks at the clock again.

    Callbacks run on the engine's own task, synchronously, and delay the
    loop for as long as they take.

    Attributes:
        operation: The callable being retried
        options: Frozen RetryOptions for this run
        channel: OutcomeChannel the outcome is delivered to
        task: Background task once start() was called
    """

    def __init__(self, operation: Optional[Operation], *overrides: RetryOverride):
        """
        Initialize the engine.

        Args:
            operation: Zero-argument callable or coroutine function to retry
            *overrides: Option overrides, applied in order

        Raises:
            OperationMissingError: operation is None
        """
        if operation is None:
            raise OperationMissingError()

        self.operation = operation
        self.options = build_options(*overrides)
        self.channel = self.options.channel if self.options.channel is not None else OutcomeChannel()
        self.task: Optional[asyncio.Task] = None
        self._started = False
        self._log = logger.bind(operation=self.options.name)

    async def run(self) -> RetryOutcome:
        """
        Run the attempt loop inline and deliver the outcome.

        Returns:
            The RetryOutcome that was delivered to the channel

        Raises:
            RetryError: The engine was already run
            ChannelClosedError: The supplied channel already holds an outcome
            Exception: Any error raised by a callback aborts the run; the
                channel is closed with it
        """
        if self._started:
            raise RetryError("a RetryEngine can only be run once")
        self._ensure_channel_open()
        self._started = True

        try:
            outcome = await self._run_attempts()
        except BaseException as exc:
            # Cancellation closes the channel empty, receivers get ChannelClosedError
            self.channel.close(exc if isinstance(exc, Exception) else None)
            raise

        self.channel.deliver(outcome)
        return outcome

    def start(self) -> OutcomeChannel:
        """
        Schedule run() as a background task on the running event loop.

        Returns:
            The channel the outcome will be delivered to

        Raises:
            RuntimeError: No event loop is running
            ChannelClosedError: The supplied channel already holds an outcome
        """
        loop = asyncio.get_running_loop()
        self._ensure_channel_open()
        self.task = loop.create_task(self.run(), name=f"retry:{self.options.name}")
        _background_tasks.add(self.task)
        self.task.add_done_callback(_reap)
        return self.channel

    def _ensure_channel_open(self) -> None:
        if self.channel.closed:
            raise ChannelClosedError("outcome channel is already closed, refusing to start a run")

    async def _run_attempts(self) -> RetryOutcome:
        options = self.options
        started_at = time.monotonic()
        deadline = started_at + options.timeout if options.timeout_enabled else None
        attempts = 0
        last_error: Optional[BaseException] = None

        self._log.debug(
            "Starting retry run",
            max_tries=options.max_tries,
            delay=options.delay,
            timeout=options.timeout if options.timeout_enabled else None,
        )

        while True:
            if attempts >= options.max_tries:
                return await self._stop(
                    StopReason.MAX_TRIES_EXCEEDED,
                    options.on_max_tries_reached,
                    last_error,
                    attempts,
                    started_at,
                )

            if deadline is not None and time.monotonic() >= deadline:
                return await self._stop(
                    StopReason.TIMEOUT_EXCEEDED,
                    options.on_timeout,
                    last_error,
                    attempts,
                    started_at,
                )

            attempts += 1
            if settings.LOG_ATTEMPTS:
                self._log.debug("Invoking operation", attempt=attempts)

            try:
                value = await self._invoke()
            except Exception as e:
                last_error = e
                self._record_attempt("failure")
                self._log.warning(
                    f"Attempt {attempts} failed",
                    attempt=attempts,
                    max_tries=options.max_tries,
                    error_type=type(e).__name__,
                    error=str(e),
                )

                if options.on_retry is not None:
                    await _call_hook(options.on_retry, e)

                await asyncio.sleep(options.delay)
                continue

            self._record_attempt("success")
            outcome = RetryOutcome(
                value=value,
                attempts=attempts,
                elapsed_ms=_elapsed_ms(started_at),
            )
            self._record_run("success", started_at)
            self._log.info(
                "Operation succeeded",
                attempts=attempts,
                elapsed_ms=outcome.elapsed_ms,
            )
            return outcome

    async def _invoke(self) -> Any:
        if inspect.iscoroutinefunction(self.operation):
            return await self.operation()

        result = await asyncio.to_thread(self.operation)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _stop(
        self,
        reason: StopReason,
        callback: Optional[ErrorCallback],
        last_error: Optional[BaseException],
        attempts: int,
        started_at: float,
    ) -> RetryOutcome:
        self._log.warning(
            f"Retry stopped: {reason.value}",
            stop_reason=reason.value,
            attempts=attempts,
            last_error_type=type(last_error).__name__ if last_error else None,
        )

        if callback is not None:
            await _call_hook(callback, last_error)

        self._record_run(reason.value, started_at)
        return RetryOutcome(
            stop_reason=reason,
            last_error=last_error,
            attempts=attempts,
            elapsed_ms=_elapsed_ms(started_at),
        )

    def _record_attempt(self, result: str) -> None:
        if settings.PROMETHEUS_ENABLED:
            retry_attempts_total.labels(result=result).inc()

    def _record_run(self, outcome: str, started_at: float) -> None:
        if settings.PROMETHEUS_ENABLED:
            retry_runs_total.labels(outcome=outcome).inc()
            retry_run_duration_seconds.observe(time.monotonic() - started_at)


async def _call_hook(callback: ErrorCallback, error: Optional[BaseException]) -> None:
    result = callback(error)
    if inspect.isawaitable(result):
        await result


def _elapsed_ms(started_at: float) -> int:
    return max(0, int((time.monotonic() - started_at) * 1000))


def _reap(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if not task.cancelled():
        # Errors were already forwarded to the outcome channel
        task.exception()


def spawn(operation: Optional[Operation], *overrides: RetryOverride) -> OutcomeChannel:
    """
    Start a retry run in the background and return its outcome channel.

    Must be called from a running event loop.

    Raises:
        OperationMissingError: operation is None (no task is created)
    """
    return RetryEngine(operation, *overrides).start()


async def retry(operation: Optional[Operation], *overrides: RetryOverride) -> RetryOutcome:
    """Run a retry loop inline and return its outcome."""
    return await RetryEngine(operation, *overrides).run()


def run_blocking(operation: Optional[Operation], *overrides: RetryOverride) -> RetryOutcome:
    """
    Run a retry loop from synchronous code, blocking until it finishes.

    Starts a fresh event loop with asyncio.run, so it cannot be called from
    inside a running loop.
    """
    engine = RetryEngine(operation, *overrides)
    return asyncio.run(engine.run())
