"""
Option Type Definitions.

An Option is a named value that can be written into a packet. Option types
opt into extra behaviour by inheriting from the capability classes below;
the packet builder checks for each capability independently, in a fixed
order:

1. OmittableOption - decides at insertion time whether to be dropped
2. FinalizableOption - last-minute preparation before being stored
3. AdvancedOption - mutates the packet directly instead of being stored
4. MergeableOption - combines itself with the stored option of its class
"""

from __future__ import annotations

import abc
from typing import Any, Callable, Iterable, MutableMapping, Optional


class Option(abc.ABC):
    """
    Base class for everything that can be written to a packet.

    Subclasses must provide ``option_class``, the key under which the
    option is stored. It must not change for the lifetime of the option.
    """

    @property
    @abc.abstractmethod
    def option_class(self) -> str:
        """The packet field this option is stored under."""
        ...

    def serialize(self) -> Any:
        """
        Get the JSON-compatible value written to the packet.

        The default implementation exposes the public attributes of the
        option. Most option types override this.

        Returns:
            A value accepted by ``json.dumps``
        """
        return {
            key: value
            for key, value in vars(self).items()
            if not key.startswith('_')
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.serialize()!r})"


class OmittableOption(abc.ABC):
    """An option which can elect to be left out of the packet."""

    @abc.abstractmethod
    def omit(self) -> bool:
        """Return True to have this option discarded instead of stored."""
        ...


class MergeableOption(abc.ABC):
    """
    An option which can combine itself with an existing option of the
    same class.
    """

    @abc.abstractmethod
    def merge(self, old: Option) -> Option:
        """
        Merge this option with the previously stored one.

        Values from ``self`` win on conflict, values from ``old`` fill the
        gaps. Neither input may be modified; return a new option instead.

        Args:
            old: The option currently stored under the same class

        Returns:
            The option to store in place of ``old``
        """
        ...


class FinalizableOption(abc.ABC):
    """An option which needs to prepare itself right before being stored."""

    @abc.abstractmethod
    def finalize(self) -> None:
        """Called exactly once, immediately before the option is stored."""
        ...


class AdvancedOption(abc.ABC):
    """An option which manipulates the packet directly."""

    @abc.abstractmethod
    def apply(self, packet: MutableMapping[str, Option]) -> None:
        """
        Apply this option to the packet.

        Args:
            packet: The packet being built
        """
        ...


OptionProvider = Callable[[], Optional[Option]]


def fold_options(
    options: Iterable[Optional[Option]],
    option_class: str,
) -> Optional[Option]:
    """
    Resolve the effective option of one class from an option list.

    Options are folded in order exactly as a packet would store them:
    mergeable options merge with the earlier value and everything else
    replaces it. Omission and finalization are packet insertion concerns
    and are not applied here.

    Args:
        options: Options in application order (None entries are skipped)
        option_class: The class to resolve

    Returns:
        The effective option, or None if no option of that class is present
    """
    current: Optional[Option] = None
    for option in options:
        if option is None or option.option_class != option_class:
            continue
        if current is not None and isinstance(option, MergeableOption):
            current = option.merge(current)
        else:
            current = option
    return current
