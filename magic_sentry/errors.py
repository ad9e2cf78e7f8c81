"""
Error Types for Magic Sentry.

Failures are matched by message rather than by exception class, because
transports and queues wrap the errors they report with extra context.
An ErrType is a sentinel message; an error "is an instance" of it when the
sentinel text appears anywhere in the error's string form.

Example:
    event = client.capture(message("hello"))
    if ERR_SEND_QUEUE_FULL.is_instance(event.error()):
        ...
"""

from __future__ import annotations

from typing import Optional


class ErrType(str):
    """
    A sentinel error message.

    ErrType values compare and hash like plain strings, which keeps them
    usable as dictionary keys and in log output.
    """

    def is_instance(self, err: Optional[BaseException]) -> bool:
        """
        Check whether an error carries this sentinel.

        Args:
            err: The error to inspect (None is never an instance)

        Returns:
            True if the sentinel text appears in the error message
        """
        if err is None:
            return False
        return str(self) in str(err)

    def error(self) -> "MagicSentryError":
        """Create a bare exception carrying this sentinel's message."""
        return MagicSentryError(str(self))


class MagicSentryError(Exception):
    """Base error for all magic_sentry operations."""


class SendQueueError(MagicSentryError):
    """An event could not be handed to, or was dropped by, a send queue."""


class TransportError(MagicSentryError):
    """A transport failed to deliver a packet."""


class DSNError(MagicSentryError, ValueError):
    """A DSN could not be parsed or is missing required parts."""


# Delivery errors
ERR_SEND_QUEUE_FULL = ErrType("magic_sentry: send queue was full")
ERR_SEND_QUEUE_SHUTDOWN = ErrType("magic_sentry: send queue was shutdown")

# Configuration errors
ERR_BAD_URL = ErrType("magic_sentry: bad DSN URL")
ERR_MISSING_PUBLIC_KEY = ErrType("magic_sentry: missing public key")
ERR_MISSING_PROJECT_ID = ErrType("magic_sentry: missing project ID")


def wrap(
    cause: BaseException,
    message: str,
    error_class: type = MagicSentryError,
) -> MagicSentryError:
    """
    Wrap an error with additional context.

    The resulting message is ``"<message>: <cause>"`` and the original error
    is chained as ``__cause__``.

    Args:
        cause: The underlying error
        message: Context to prefix the cause with
        error_class: Exception class to build (a MagicSentryError subclass)

    Returns:
        The wrapping exception
    """
    err = error_class(f"{message}: {cause}")
    err.__cause__ = cause
    return err
