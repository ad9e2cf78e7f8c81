"""
Event identity and content options: event ID, timestamp and message.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from magic_sentry.options.base import Option
from magic_sentry.registry import add_default_option_provider
from magic_sentry.util.const import OPTION_CLASS_EVENT_ID, OPTION_CLASS_MESSAGE

_EVENT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def new_event_id() -> str:
    """Generate a new random event ID (32 lowercase hex characters)."""
    return uuid.uuid4().hex


class EventIDOption(Option):
    option_class = OPTION_CLASS_EVENT_ID

    def __init__(self, event_id: str):
        self.event_id = event_id

    def serialize(self) -> str:
        return self.event_id


def event_id(value: str) -> Optional[Option]:
    """
    Set the ID of the event.

    Every packet gets a fresh ID by default; only set one yourself if you
    need to know it up front.

    Returns:
        The option, or None if the value is not a valid event ID
    """
    value = (value or "").lower()
    if not _EVENT_ID_PATTERN.match(value):
        return None
    return EventIDOption(value)


class TimestampOption(Option):
    option_class = "timestamp"

    def __init__(self, timestamp: datetime):
        self.timestamp = timestamp

    def serialize(self) -> str:
        return self.timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def timestamp(value: datetime) -> Option:
    """Set the time at which the event occurred (defaults to now)."""
    return TimestampOption(value)


class MessageOption(Option):
    option_class = OPTION_CLASS_MESSAGE

    def __init__(self, message: str, params: Tuple[Any, ...] = (), formatted: str = ""):
        self.message = message
        self.params = params
        self.formatted = formatted

    def serialize(self) -> dict:
        payload = {"message": self.message}
        if self.params:
            payload["params"] = list(self.params)
            payload["formatted"] = self.formatted
        return payload


def message(fmt: str, *params: Any) -> Option:
    """
    Attach a message to the event.

    With params, the message is treated as a %-style format string and the
    formatted result is sent alongside the template and its params. A template
    which does not match its params is sent unformatted.

    Example:
        client.capture(message("User %s failed to log in", username))
    """
    if not params:
        return MessageOption(fmt)

    try:
        formatted = fmt % params
    except (TypeError, ValueError):
        formatted = fmt
    return MessageOption(fmt, params, formatted)


add_default_option_provider(lambda: EventIDOption(new_event_id()))
add_default_option_provider(lambda: TimestampOption(datetime.now(timezone.utc)))
