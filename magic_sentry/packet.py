"""
Packet construction.

A Packet is the document describing one event. It maps option classes to
the single option stored for each, and knows how to fold new options into
itself according to their capabilities.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from magic_sentry.options.base import (
    AdvancedOption,
    FinalizableOption,
    MergeableOption,
    OmittableOption,
    Option,
)
from magic_sentry.util.const import OPTION_CLASS_EVENT_ID


class Packet(Dict[str, Option]):
    """
    A mapping of option class to option, serialized and sent as one event.

    You will not usually build a Packet yourself; ``Client.capture()``
    creates one from the client's defaults and the options you pass it.

    Example:
        packet = Packet().set_options(message("hello"), tags({"a": "1"}))
        packet.set_options(tags({"b": "2"}))  # merged with the first tags
        body = packet.to_json()
    """

    def set_options(self, *options: Optional[Option]) -> "Packet":
        """
        Apply options to this packet, in order.

        ``None`` options are skipped, omitted options are dropped, mergeable
        options are merged with what is already stored and everything else
        replaces the existing entry.

        Args:
            *options: Options to apply

        Returns:
            Self for chaining
        """
        for option in options:
            self._set_option(option)
        return self

    def _set_option(self, option: Optional[Option]) -> None:
        if option is None:
            return

        if isinstance(option, OmittableOption) and option.omit():
            return

        if isinstance(option, FinalizableOption):
            option.finalize()

        if isinstance(option, AdvancedOption):
            option.apply(self)
            return

        existing = self.get(option.option_class)
        if existing is not None and isinstance(option, MergeableOption):
            self[option.option_class] = option.merge(existing)
        else:
            self[option.option_class] = option

    def clone(self) -> "Packet":
        """
        Create an independent copy of this packet.

        The mapping is copied, the options themselves are shared.

        Returns:
            A new Packet with the same entries
        """
        return Packet(self)

    def get_event_id(self) -> str:
        """
        Get the ID of the event described by this packet.

        Returns:
            The event ID, or an empty string if none has been set
        """
        option = self.get(OPTION_CLASS_EVENT_ID)
        if option is None:
            return ""
        return str(option.serialize() or "")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize every entry of the packet.

        Returns:
            Dictionary of option class -> serialized value
        """
        return {
            option_class: option.serialize()
            for option_class, option in self.items()
        }

    def to_json(self) -> str:
        """
        Encode the packet as JSON.

        Values which are not JSON serializable are encoded using ``str()``.

        Returns:
            The JSON document
        """
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        return f"Packet({sorted(self.keys())!r})"
