"""
Queued Event Handles.

A QueuedEvent is returned by every ``capture()`` call. It starts out
pending and is completed exactly once by the send queue that owns it, with
either None (sent) or the error that prevented delivery.

Callers can observe completion in three ways, all derived from the same
underlying ``threading.Event``:

- ``wait()`` blocks the calling thread
- ``wait_channel()`` returns a ``concurrent.futures.Future``, which makes
  timeouts a matter of ``future.result(timeout=...)``
- ``await wait_async()`` for asyncio code

Nobody is required to wait: an event which is never observed is simply
fire-and-forget.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from magic_sentry.options.config import Config
    from magic_sentry.packet import Packet


class QueuedEvent:
    """
    Tracks the delivery of a single event.

    Example:
        event = client.capture(message("Example Event"))

        # Block until the event has been sent (or failed)
        event.wait()

        # Or race the delivery against a timeout
        try:
            err = event.wait_channel().result(timeout=1.0)
        except concurrent.futures.TimeoutError:
            print("timed out waiting for send")
        else:
            if err is not None:
                print("failed to send event:", err)
            else:
                print("sent event:", event.event_id)

    Send queue implementations use ``packet``, ``config`` and
    ``complete()``.
    """

    def __init__(self, config: Optional["Config"], packet: Optional["Packet"]):
        """
        Create a pending event.

        Args:
            config: The resolved configuration the event is sent with
            packet: The packet describing the event
        """
        self._config = config
        self._packet = packet
        self._error: Optional[BaseException] = None
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._futures: List[Future] = []

    @property
    def config(self) -> Optional["Config"]:
        """The configuration this event will be sent with."""
        return self._config

    @property
    def packet(self) -> Optional["Packet"]:
        """The packet describing this event."""
        return self._packet

    @property
    def event_id(self) -> str:
        """The ID of this event, or an empty string if it has none."""
        if self._packet is None:
            return ""
        return self._packet.get_event_id()

    @property
    def done(self) -> bool:
        """Whether the event has been completed."""
        return self._done.is_set()

    def complete(self, error: Optional[BaseException] = None) -> bool:
        """
        Mark the event as sent (error is None) or failed.

        Only the first call has any effect; later calls neither change the
        stored error nor wake any waiter again.

        Args:
            error: The delivery error, or None on success

        Returns:
            True if this call completed the event
        """
        with self._lock:
            if self._done.is_set():
                return False
            self._error = error
            futures, self._futures = self._futures, []
            self._done.set()

        for future in futures:
            # Futures cancelled by their owner have nobody left to notify
            if future.set_running_or_notify_cancel():
                future.set_result(error)
        return True

    def wait(self) -> "QueuedEvent":
        """
        Block until the event has been completed.

        Returns immediately if it already has been.

        Returns:
            Self for chaining
        """
        self._done.wait()
        return self

    def wait_channel(self) -> Future:
        """
        Get a future which resolves once the event is completed.

        The future's result is the delivery error, or None if the event was
        sent successfully. If the event has already completed the future is
        returned already resolved. No thread is started to watch the event.

        Returns:
            A ``concurrent.futures.Future`` resolving to the error or None
        """
        future: Future = Future()
        with self._lock:
            if not self._done.is_set():
                self._futures.append(future)
                return future
            error = self._error

        future.set_result(error)
        return future

    async def wait_async(self) -> "QueuedEvent":
        """
        Wait for completion from asyncio code without blocking the loop.

        Returns:
            Self for chaining
        """
        await asyncio.wrap_future(self.wait_channel())
        return self

    def error(self) -> Optional[BaseException]:
        """
        Wait for the event to complete and get its delivery error.

        Returns:
            The error which prevented delivery, or None if it was sent
        """
        self.wait()
        return self._error

    def __repr__(self) -> str:
        state = "completed" if self.done else "pending"
        return f"QueuedEvent(event_id={self.event_id!r}, state={state})"
