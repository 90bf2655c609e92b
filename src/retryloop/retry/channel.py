"""
One-shot outcome channel.

The engine hands its single terminal RetryOutcome to an OutcomeChannel.
The channel accepts exactly one write and is closed right after it; any
later write raises ChannelClosedError. Readers either await ``receive()``
or iterate the channel with ``async for``, which yields the outcome once
and then ends, like reading a closed channel to exhaustion.
"""

import asyncio
from typing import AsyncIterator, Optional

from retryloop.retry.exceptions import ChannelClosedError
from retryloop.retry.outcome import RetryOutcome


class OutcomeChannel:
    """
    Single-slot, write-once delivery handle for a RetryOutcome.

    The channel can be created outside a running event loop; it binds to a
    loop on first wait.

    Reading a channel closed without an outcome: ``receive()`` raises
    ChannelClosedError (or the error passed to ``close()``), whereas
    ``async for`` simply ends with no items unless an error was passed to
    ``close()``, the same way ranging over a closed, empty channel ends.
    """

    def __init__(self) -> None:
        self._outcome: Optional[RetryOutcome] = None
        self._error: Optional[BaseException] = None
        self._closed = False
        self._event = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed

    def done(self) -> bool:
        """True once an outcome has been delivered."""
        return self._outcome is not None

    def deliver(self, outcome: RetryOutcome) -> None:
        """
        Store the outcome and close the channel.

        Raises:
            ChannelClosedError: The channel already holds an outcome or was
                closed without one
        """
        if self._closed:
            raise ChannelClosedError("outcome channel is closed, cannot deliver twice")
        self._outcome = outcome
        self._closed = True
        self._event.set()

    def close(self, error: Optional[BaseException] = None) -> None:
        """
        Close the channel without an outcome.

        Receivers then get ``error`` raised, or ChannelClosedError if no
        error is given. Closing an already closed channel does nothing.
        """
        if self._closed:
            return
        self._error = error
        self._closed = True
        self._event.set()

    async def receive(self) -> RetryOutcome:
        """
        Wait for the outcome.

        Raises:
            ChannelClosedError: The channel was closed without an outcome
            BaseException: The error the run aborted with, if any
        """
        await self._event.wait()
        if self._outcome is not None:
            return self._outcome
        if self._error is not None:
            raise self._error
        raise ChannelClosedError("outcome channel closed without an outcome")

    def __await__(self):
        return self.receive().__await__()

    async def __aiter__(self) -> AsyncIterator[RetryOutcome]:
        await self._event.wait()
        if self._outcome is not None:
            yield self._outcome
        elif self._error is not None:
            raise self._error

    def __repr__(self) -> str:
        state = "delivered" if self.done() else ("closed" if self._closed else "open")
        return f"OutcomeChannel({state})"
