"""
Sequential Send Queue.

The default SendQueue: a bounded FIFO buffer drained by a single worker
thread. Producers never block. When the buffer is full, or the queue has
been shut down, the event is completed with an error immediately instead.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, Optional, TYPE_CHECKING

from magic_sentry.errors import (
    ERR_SEND_QUEUE_FULL,
    ERR_SEND_QUEUE_SHUTDOWN,
    SendQueueError,
    wrap,
)
from magic_sentry.queue.queued_event import QueuedEvent
from magic_sentry.util.const import DEFAULT_SEND_QUEUE_SIZE

if TYPE_CHECKING:
    from magic_sentry.options.config import Config
    from magic_sentry.packet import Packet

logger = logging.getLogger(__name__)


def _shutdown_error() -> SendQueueError:
    return wrap(
        SendQueueError("sequential send queue: shutdown"),
        ERR_SEND_QUEUE_SHUTDOWN,
        SendQueueError,
    )


def _full_error() -> SendQueueError:
    return wrap(
        SendQueueError("sequential send queue: buffer full"),
        ERR_SEND_QUEUE_FULL,
        SendQueueError,
    )


class SequentialSendQueue:
    """
    Send events one at a time, in the order they were queued.

    Example:
        queue = SequentialSendQueue(buffer_size=10)
        client = new_client(use_send_queue(queue))

        event = client.capture(message("hello"))
        event.wait()

        queue.shutdown(wait=True)
    """

    def __init__(self, buffer_size: int = DEFAULT_SEND_QUEUE_SIZE):
        """
        Create the queue and start its worker.

        Args:
            buffer_size: Maximum number of events waiting to be sent
                (values below 1 are treated as 1)

        Raises:
            ValueError: If buffer_size is negative
        """
        if buffer_size < 0:
            raise ValueError(f"buffer_size must not be negative, got {buffer_size}")

        self._capacity = max(buffer_size, 1)
        self._buffer: Deque[QueuedEvent] = deque()
        self._cond = threading.Condition()
        self._shutdown = False

        self._worker = threading.Thread(
            target=self._run,
            name="magic-sentry-send-queue",
            daemon=True,
        )
        self._worker.start()

    @property
    def capacity(self) -> int:
        """Maximum number of buffered events."""
        return self._capacity

    @property
    def is_shutdown(self) -> bool:
        """Whether shutdown() has been called."""
        return self._shutdown

    def enqueue(
        self,
        config: Optional["Config"],
        packet: Optional["Packet"],
    ) -> QueuedEvent:
        """
        Queue a packet for sending without blocking.

        Args:
            config: Resolved configuration for the event
            packet: The packet to send

        Returns:
            A QueuedEvent, already completed with an error if the queue
            was full or shut down
        """
        event = QueuedEvent(config, packet)

        with self._cond:
            if self._shutdown:
                error = _shutdown_error()
            elif len(self._buffer) >= self._capacity:
                error = _full_error()
            else:
                self._buffer.append(event)
                self._cond.notify()
                return event

        event.complete(error)
        return event

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop accepting events and stop the worker.

        Events still waiting in the buffer when the worker stops are
        completed with a shutdown error.

        Args:
            wait: Block until the worker has stopped
        """
        with self._cond:
            if not self._shutdown:
                self._shutdown = True
                self._cond.notify_all()
                logger.debug("Send queue shutdown requested (%d buffered)", len(self._buffer))

        if wait and threading.current_thread() is not self._worker:
            self._worker.join()

    def _next(self) -> Optional[QueuedEvent]:
        with self._cond:
            while not self._buffer and not self._shutdown:
                self._cond.wait()
            if self._shutdown:
                return None
            return self._buffer.popleft()

    def _run(self) -> None:
        logger.debug("Send queue worker started (capacity=%d)", self._capacity)
        try:
            while True:
                event = self._next()
                if event is None:
                    break
                event.complete(self._send(event))
        finally:
            self._drain()
            logger.debug("Send queue worker stopped")

    @staticmethod
    def _send(event: QueuedEvent) -> Optional[BaseException]:
        config = event.config
        if config is None:
            return SendQueueError("sequential send queue: event has no config")
        try:
            config.transport.send(config.dsn, event.packet)
        except Exception as e:
            return e
        return None

    def _drain(self) -> None:
        with self._cond:
            self._shutdown = True
            remaining, self._buffer = list(self._buffer), deque()
        for event in remaining:
            event.complete(_shutdown_error())
