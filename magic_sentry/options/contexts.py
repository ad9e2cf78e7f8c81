"""
Context Option.

Contexts describe the environment an event happened in. Each context is a
named mapping; options of this class merge so several contexts can be
collected from different places.
"""

from __future__ import annotations

import platform as _platform
from typing import Any, Dict, Optional

from magic_sentry.options.base import MergeableOption, Option
from magic_sentry.registry import add_default_option_provider


class ContextOption(Option, MergeableOption):
    option_class = "contexts"

    def __init__(self, contexts: Optional[Dict[str, Dict[str, Any]]] = None):
        self.contexts: Dict[str, Dict[str, Any]] = dict(contexts or {})

    def merge(self, old: Option) -> Option:
        if not isinstance(old, ContextOption):
            return self
        return ContextOption({**old.contexts, **self.contexts})

    def serialize(self) -> Dict[str, Dict[str, Any]]:
        return {key: dict(data) for key, data in self.contexts.items()}


def context(key: str, data: Dict[str, Any]) -> Option:
    """
    Add a named context to the event.

    Example:
        context("device", {"model": "rpi4", "arch": "arm64"})
    """
    return ContextOption({key: dict(data)})


def _runtime_context() -> Option:
    return context("runtime", {
        "name": _platform.python_implementation(),
        "version": _platform.python_version(),
    })


def _os_context() -> Option:
    return context("os", {
        "name": _platform.system(),
        "version": _platform.release(),
    })


add_default_option_provider(_runtime_context)
add_default_option_provider(_os_context)
