"""
Send Queue Interface.

A SendQueue coordinates the transmission of events. Clients hand it a
resolved config and a packet and get a QueuedEvent back straight away;
when and how the packet is sent is entirely up to the queue.
"""

from __future__ import annotations

from typing import Optional, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from magic_sentry.options.config import Config
    from magic_sentry.packet import Packet
    from magic_sentry.queue.queued_event import QueuedEvent


@runtime_checkable
class SendQueue(Protocol):
    """
    Protocol for send queues.

    Custom queues can be used to control parallelism or add circuit
    breaking. Implementations must never block or raise in ``enqueue()``;
    every failure is reported by completing the returned event with an
    error.
    """

    def enqueue(
        self,
        config: Optional["Config"],
        packet: Optional["Packet"],
    ) -> "QueuedEvent":
        """
        Queue a packet for sending.

        Args:
            config: Resolved configuration (DSN and transport) for the event
            packet: The packet to send; it must not be modified

        Returns:
            A QueuedEvent tracking the delivery
        """
        ...

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop accepting events.

        Safe to call more than once.

        Args:
            wait: Block until the queue's worker has stopped
        """
        ...
