"""
Process-wide Defaults.

A single DefaultsRegistry holds the state shared by every client in the
process:

- the default option providers, consulted each time a root client resolves
  its defaults
- the default send queue
- the default transport

Every piece of state is replaced as a whole reference under a lock and read
as a single attribute, so readers never observe a half-updated value.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Tuple, TYPE_CHECKING

from magic_sentry.util.const import DEFAULT_SEND_QUEUE_SIZE

if TYPE_CHECKING:
    from magic_sentry.options.base import Option, OptionProvider
    from magic_sentry.queue.send_queue import SendQueue
    from magic_sentry.transport.base import Transport


class DefaultsRegistry:
    """
    Holder for process-wide default providers, send queue and transport.

    Example:
        registry = DefaultsRegistry()
        registry.add_provider(lambda: logger_name("app"))
        registry.set_send_queue(SequentialSendQueue(10))
    """

    def __init__(self):
        """Initialize an empty registry with lazily built defaults."""
        self._lock = threading.Lock()
        self._providers: Tuple[OptionProvider, ...] = ()
        self._send_queue: Optional["SendQueue"] = None
        self._transport: Optional["Transport"] = None

    @property
    def providers(self) -> Tuple[OptionProvider, ...]:
        """Snapshot of the registered default option providers."""
        return self._providers

    def add_provider(self, provider: OptionProvider) -> "DefaultsRegistry":
        """
        Register a default option provider.

        Args:
            provider: Zero-argument callable returning an Option or None

        Returns:
            Self for chaining
        """
        with self._lock:
            self._providers = self._providers + (provider,)
        return self

    def replace_providers(
        self,
        providers: Iterable[OptionProvider] = (),
    ) -> Tuple[OptionProvider, ...]:
        """
        Swap the whole provider list.

        Mostly useful in tests which need a clean set of defaults.

        Args:
            providers: The new providers

        Returns:
            The providers which were registered before the swap
        """
        new_providers = tuple(providers)
        with self._lock:
            old, self._providers = self._providers, new_providers
        return old

    def evaluate_providers(self) -> list:
        """
        Evaluate every registered provider now.

        Returns:
            The options produced, in registration order (may contain None)
        """
        return [provider() for provider in self._providers]

    def send_queue(self) -> "SendQueue":
        """Get the default send queue, creating it on first use."""
        queue = self._send_queue
        if queue is not None:
            return queue

        from magic_sentry.queue.sequential import SequentialSendQueue

        with self._lock:
            if self._send_queue is None:
                self._send_queue = SequentialSendQueue(DEFAULT_SEND_QUEUE_SIZE)
            return self._send_queue

    def set_send_queue(self, queue: Optional["SendQueue"]) -> None:
        """
        Replace the default send queue.

        Passing None restores the built-in sequential queue, which is
        created again the next time it is needed.
        """
        with self._lock:
            self._send_queue = queue

    def transport(self) -> "Transport":
        """Get the default transport, creating it on first use."""
        transport = self._transport
        if transport is not None:
            return transport

        from magic_sentry.transport.http import HTTPTransport

        with self._lock:
            if self._transport is None:
                self._transport = HTTPTransport()
            return self._transport

    def set_transport(self, transport: Optional["Transport"]) -> None:
        """
        Replace the default transport.

        Passing None restores the built-in HTTP transport.
        """
        with self._lock:
            self._transport = transport


registry = DefaultsRegistry()


def add_default_option_provider(provider: OptionProvider) -> None:
    """
    Register a provider used to populate every packet.

    Providers are called each time a root client resolves its defaults, so
    they can return values which change over time. Returning None adds
    nothing.
    """
    registry.add_provider(provider)


def add_default_options(*options: Optional[Option]) -> None:
    """
    Register static options used to populate every packet.

    ``None`` options are ignored.
    """
    for option in options:
        if option is None:
            continue
        registry.add_provider(lambda option=option: option)


def default_send_queue() -> "SendQueue":
    """Get the send queue used by clients without their own."""
    return registry.send_queue()


def set_default_send_queue(queue: Optional["SendQueue"]) -> None:
    """Change the send queue used by clients without their own."""
    registry.set_send_queue(queue)


def default_transport() -> "Transport":
    """Get the transport used by clients without their own."""
    return registry.transport()


def set_default_transport(transport: Optional["Transport"]) -> None:
    """Change the transport used by clients without their own."""
    registry.set_transport(transport)
