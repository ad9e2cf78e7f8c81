"""
Client.

A Client is an immutable set of options used to build events. Clients form
a tree: a child created with ``with_options()`` inherits every option of its
ancestors and adds its own, so application-wide settings live on the root
and request or task specific details live on short-lived children.

Event construction, in order:

1. Every registered default option provider is evaluated
2. The options of each ancestor are applied, root first
3. The client's own options are applied
4. The options passed to ``capture()`` are applied

Example:
    client = new_client(
        use_dsn("https://key@sentry.example.com/3"),
        release("1.4.2"),
    )

    request_client = client.with_options(tags({"route": "/checkout"}))
    event = request_client.capture(message("Checkout failed"))

    if event.error() is not None:
        print("event not delivered:", event.error())
"""

from __future__ import annotations

import sys
import threading
from typing import List, Optional, TYPE_CHECKING

from magic_sentry.options.base import Option, fold_options
from magic_sentry.options.config import (
    EventConfig,
    SendQueueOption,
    TransportOption,
    resolve_config,
    resolve_dsn,
    resolve_send_queue,
    resolve_transport,
)
from magic_sentry.options.event import message as message_option
from magic_sentry.options.exception import exception_for_error
from magic_sentry.packet import Packet
from magic_sentry.queue.queued_event import QueuedEvent
from magic_sentry.registry import registry

if TYPE_CHECKING:
    from magic_sentry.queue.send_queue import SendQueue
    from magic_sentry.transport.base import Transport


class Client:
    """
    Builds events from a hierarchy of options and hands them to a queue.

    Clients never change once created; every "modification" returns a new
    child client.
    """

    def __init__(self, *options: Optional[Option], parent: Optional["Client"] = None):
        """
        Create a client.

        Args:
            *options: Options applied to every event this client captures
            parent: Client to inherit options from, None for a root client
        """
        self._parent = parent
        self._options = tuple(options)

    @property
    def parent(self) -> Optional["Client"]:
        return self._parent

    @property
    def options(self) -> tuple:
        """The options owned by this client, without its ancestors'."""
        return self._options

    def full_default_options(self) -> List[Optional[Option]]:
        """
        Resolve every option applied before the call-site options.

        Returns:
            Provider options, then ancestor options root first, then the
            client's own options
        """
        lineage = []
        client: Optional[Client] = self
        while client is not None:
            lineage.append(client)
            client = client._parent

        options = registry.evaluate_providers()
        for client in reversed(lineage):
            options.extend(client._options)
        return options

    def with_options(self, *options: Optional[Option]) -> "Client":
        """Create a child client which adds the given options."""
        return Client(*options, parent=self)

    def use_send_queue(self, queue: Optional["SendQueue"]) -> "Client":
        """
        Create a child client sending through the given queue.

        Passing None makes the child use the process-wide default queue,
        even if an ancestor configured another one.
        """
        return Client(SendQueueOption(queue), parent=self)

    def use_transport(self, transport: Optional["Transport"]) -> "Client":
        """
        Create a child client sending with the given transport.

        Passing None makes the child use the process-wide default transport.
        """
        return Client(TransportOption(transport), parent=self)

    def get_option(self, option_class: str) -> Optional[Option]:
        """
        Get the effective option of a class from this client's defaults.

        Mergeable options are merged exactly as they would be in a packet.
        Options which omit themselves from packets are still returned.

        Args:
            option_class: The class to look up

        Returns:
            The effective option, or None if nothing provides that class
        """
        return fold_options(self.full_default_options(), option_class)

    def config(self) -> EventConfig:
        """Snapshot of the delivery settings this client currently resolves to."""
        return resolve_config(self.full_default_options())

    @property
    def dsn(self) -> str:
        return resolve_dsn(self.full_default_options())

    @property
    def transport(self) -> "Transport":
        return resolve_transport(self.full_default_options())

    @property
    def send_queue(self) -> "SendQueue":
        return resolve_send_queue(self.full_default_options())

    def capture(self, *options: Optional[Option]) -> QueuedEvent:
        """
        Build an event and queue it for sending.

        This never blocks and never raises because of delivery problems;
        wait on the returned QueuedEvent to find out what happened.

        Args:
            *options: Options for this event only, applied last

        Returns:
            The QueuedEvent produced by the send queue
        """
        all_options = self.full_default_options()
        all_options.extend(options)

        packet = Packet().set_options(*all_options)
        config = resolve_config(all_options)

        return config.send_queue.enqueue(config, packet)

    def capture_message(self, text: str, *options: Optional[Option]) -> QueuedEvent:
        """Capture an event carrying a plain message."""
        return self.capture(message_option(text), *options)

    def capture_exception(
        self,
        exc: Optional[BaseException] = None,
        *options: Optional[Option],
    ) -> QueuedEvent:
        """
        Capture an event describing an exception and its causes.

        Args:
            exc: The exception, defaults to the one currently being handled
            *options: Additional options for this event

        Example:
            try:
                sync_inventory()
            except Exception:
                client.capture_exception()
        """
        if exc is None:
            exc = sys.exc_info()[1]
        return self.capture(exception_for_error(exc), *options)

    def __repr__(self) -> str:
        depth = 0
        parent = self._parent
        while parent is not None:
            depth += 1
            parent = parent._parent
        return f"Client(options={len(self._options)}, depth={depth})"


def new_client(*options: Optional[Option]) -> Client:
    """Create a root client."""
    return Client(*options)


_default_client_lock = threading.Lock()
_default_client: Optional[Client] = None


def default_client() -> Client:
    """The process-wide root client, created on first use."""
    global _default_client
    client = _default_client
    if client is not None:
        return client

    with _default_client_lock:
        if _default_client is None:
            _default_client = Client()
        return _default_client


def capture(*options: Optional[Option]) -> QueuedEvent:
    """Capture an event with the default client."""
    return default_client().capture(*options)
