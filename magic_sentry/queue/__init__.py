"""
Event delivery for magic-sentry.

This module decouples "an event was captured" from "an event was sent":

- SendQueue: protocol every queue implements
- SequentialSendQueue: bounded FIFO buffer with a single worker thread
- QueuedEvent: handle returned to the caller, completed exactly once
"""

from magic_sentry.queue.queued_event import QueuedEvent
from magic_sentry.queue.send_queue import SendQueue
from magic_sentry.queue.sequential import SequentialSendQueue

__all__ = [
    "QueuedEvent",
    "SendQueue",
    "SequentialSendQueue",
]
