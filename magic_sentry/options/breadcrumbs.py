"""
Breadcrumbs.

A BreadcrumbsList records the most recent actions taken by the application
so they can be attached to the next event. The process-wide list returned by
``default_breadcrumbs()`` is attached to every event automatically; pass a
private list with ``breadcrumbs()`` to keep a separate trail for part of the
application.

Example:
    default_breadcrumbs().new_navigation("/cart", "/checkout").with_category("ui")

    private = BreadcrumbsList(10)
    worker = client.with_options(breadcrumbs(private))
    private.new_default({"job": "reindex"}).with_message("Started")
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Dict, List, MutableMapping, Optional

from magic_sentry.models.breadcrumb import Breadcrumb
from magic_sentry.options.base import AdvancedOption, Option
from magic_sentry.registry import add_default_option_provider

DEFAULT_BREADCRUMBS_SIZE = 10


class BreadcrumbsList:
    """Thread-safe ring buffer keeping the newest ``size`` breadcrumbs."""

    def __init__(self, size: int = DEFAULT_BREADCRUMBS_SIZE):
        self._lock = threading.Lock()
        self._items: Deque[Breadcrumb] = deque(maxlen=max(size, 0))

    @property
    def size(self) -> int:
        return self._items.maxlen

    def __len__(self) -> int:
        return len(self._items)

    def with_size(self, size: int) -> "BreadcrumbsList":
        """Change the capacity, evicting the oldest breadcrumbs if needed."""
        with self._lock:
            self._items = deque(self._items, maxlen=max(size, 0))
        return self

    def new_default(self, data: Optional[Dict[str, Any]] = None) -> Breadcrumb:
        return self._append(Breadcrumb(data=dict(data or {})))

    def new_navigation(self, from_path: str, to_path: str) -> Breadcrumb:
        return self._append(Breadcrumb(
            type="navigation",
            data={"from": from_path, "to": to_path},
        ))

    def new_http_request(self, method: str, url: str, status_code: int, reason: str) -> Breadcrumb:
        return self._append(Breadcrumb(
            type="http",
            data={
                "method": method,
                "url": url,
                "status_code": status_code,
                "reason": reason,
            },
        ))

    def values(self) -> List[Breadcrumb]:
        """Snapshot of the stored breadcrumbs, oldest first."""
        with self._lock:
            return list(self._items)

    def _append(self, crumb: Breadcrumb) -> Breadcrumb:
        with self._lock:
            self._items.append(crumb)
        return crumb


class BreadcrumbsOption(Option):
    """Breadcrumbs as stored in a packet: a fixed snapshot of a list."""
    option_class = "breadcrumbs"

    def __init__(self, values: List[Breadcrumb]):
        self.values = values

    def serialize(self) -> List[Dict[str, Any]]:
        return [crumb.to_payload() for crumb in self.values]


class BreadcrumbsSource(Option, AdvancedOption):
    """Stores a snapshot of a live list each time it is applied."""
    option_class = "breadcrumbs"

    def __init__(self, source: BreadcrumbsList):
        self.source = source

    def apply(self, packet: MutableMapping[str, Option]) -> None:
        packet[self.option_class] = BreadcrumbsOption(self.source.values())

    def serialize(self) -> List[Dict[str, Any]]:
        return [crumb.to_payload() for crumb in self.source.values()]


def breadcrumbs(source: Optional[BreadcrumbsList]) -> Optional[Option]:
    """Attach the breadcrumbs of a list to events instead of the default list."""
    if source is None:
        return None
    return BreadcrumbsSource(source)


_default_breadcrumbs = BreadcrumbsList(DEFAULT_BREADCRUMBS_SIZE)


def default_breadcrumbs() -> BreadcrumbsList:
    """The process-wide list attached to every event by default."""
    return _default_breadcrumbs


add_default_option_provider(lambda: BreadcrumbsSource(_default_breadcrumbs))
