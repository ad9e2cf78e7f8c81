from typing import MutableMapping

from magic_sentry.options.base import AdvancedOption, Option


class UnsetOption(Option, AdvancedOption):
    """Removes whatever option is stored under a class."""

    def __init__(self, target_class: str):
        self.target_class = target_class

    @property
    def option_class(self) -> str:
        return self.target_class

    def apply(self, packet: MutableMapping[str, Option]) -> None:
        packet.pop(self.target_class, None)

    def serialize(self) -> None:
        return None


def unset(option_class: str) -> Option:
    """
    Remove a field from the packet, including one set by a default.

    Example:
        client.capture(unset("server_name"))
    """
    return UnsetOption(option_class)
