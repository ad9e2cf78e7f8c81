"""
Network transports for magic-sentry.

- Transport: protocol every transport implements
- HTTPTransport: aiohttp based transport for Sentry compatible collectors
- DSN: parsed destination and credentials
"""

from magic_sentry.transport.base import Transport
from magic_sentry.transport.dsn import DSN, parse_dsn
from magic_sentry.transport.http import HTTPTransport

__all__ = [
    "DSN",
    "HTTPTransport",
    "Transport",
    "parse_dsn",
]
