"""
Magic Sentry

A client for reporting events to Sentry compatible collectors. Events are
built from composable options layered through a hierarchy of clients and
delivered asynchronously through a send queue.

Key Components:
- client: Client hierarchy and event capture
- packet: Event document built by folding options
- options: Built-in option kinds and the option capability classes
- queue: Send queues and the QueuedEvent completion handle
- transport: DSN parsing and the HTTP transport
- registry: Process-wide default providers, queue and transport
- settings: Declarative client configuration with presets
"""

from magic_sentry.errors import (
    DSNError,
    ERR_BAD_URL,
    ERR_MISSING_PROJECT_ID,
    ERR_MISSING_PUBLIC_KEY,
    ERR_SEND_QUEUE_FULL,
    ERR_SEND_QUEUE_SHUTDOWN,
    ErrType,
    MagicSentryError,
    SendQueueError,
    TransportError,
)
from magic_sentry.models import (
    Breadcrumb,
    ExceptionInfo,
    HTTPRequestInfo,
    SDKInfo,
    StackFrame,
    UserInfo,
)
from magic_sentry.options import *  # noqa: F401,F403
from magic_sentry.options import __all__ as _options_all
from magic_sentry.packet import Packet
from magic_sentry.queue import QueuedEvent, SendQueue, SequentialSendQueue
from magic_sentry.transport import DSN, HTTPTransport, Transport, parse_dsn
from magic_sentry.registry import (
    DefaultsRegistry,
    add_default_option_provider,
    add_default_options,
    default_send_queue,
    default_transport,
    registry,
    set_default_send_queue,
    set_default_transport,
)
from magic_sentry.client import Client, capture, default_client, new_client
from magic_sentry.settings import ClientSettings, get_preset, PRESETS
from magic_sentry.util.const import VERSION

__version__ = VERSION

__all__ = [
    # Errors
    "DSNError",
    "ERR_BAD_URL",
    "ERR_MISSING_PROJECT_ID",
    "ERR_MISSING_PUBLIC_KEY",
    "ERR_SEND_QUEUE_FULL",
    "ERR_SEND_QUEUE_SHUTDOWN",
    "ErrType",
    "MagicSentryError",
    "SendQueueError",
    "TransportError",
    # Models
    "Breadcrumb",
    "ExceptionInfo",
    "HTTPRequestInfo",
    "SDKInfo",
    "StackFrame",
    "UserInfo",
    # Core
    "Packet",
    "QueuedEvent",
    "SendQueue",
    "SequentialSendQueue",
    "DSN",
    "HTTPTransport",
    "Transport",
    "parse_dsn",
    "DefaultsRegistry",
    "add_default_option_provider",
    "add_default_options",
    "default_send_queue",
    "default_transport",
    "registry",
    "set_default_send_queue",
    "set_default_transport",
    "Client",
    "capture",
    "default_client",
    "new_client",
    # Settings
    "ClientSettings",
    "get_preset",
    "PRESETS",
] + list(_options_all)
