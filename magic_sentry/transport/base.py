from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from magic_sentry.packet import Packet


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for network transports.

    ``send()`` is called from a send queue's worker, never from the thread
    which captured the event. It raises on failure; the queue records the
    exception on the event. An empty DSN means sending is disabled and must
    succeed without doing any I/O.
    """

    def send(self, dsn: str, packet: "Packet") -> None:
        ...
