"""
Exception Option.

Describes one or more exceptions, outermost first. Exception options merge
by concatenation so an event can report several failures, the most
recently applied chain leading.

Example:
    try:
        charge(card)
    except PaymentError as err:
        client.capture(exception_for_error(err))
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from magic_sentry.models.exception import ExceptionInfo
from magic_sentry.options.base import FinalizableOption, MergeableOption, Option
from magic_sentry.options.stacktrace import (
    classify_frames,
    default_internal_prefixes,
    frames_from_traceback,
)


class ExceptionOption(Option, MergeableOption, FinalizableOption):
    option_class = "exception"

    def __init__(self, values: List[ExceptionInfo]):
        self.values = values
        self.internal_prefixes: Tuple[str, ...] = default_internal_prefixes()

    def with_internal_prefixes(self, *prefixes: str) -> "ExceptionOption":
        self.internal_prefixes = self.internal_prefixes + prefixes
        return self

    def merge(self, old: Option) -> Option:
        if not isinstance(old, ExceptionOption):
            return self
        merged = ExceptionOption(self.values + old.values)
        merged.internal_prefixes = self.internal_prefixes
        return merged

    def finalize(self) -> None:
        for info in self.values:
            classify_frames(info.frames, self.internal_prefixes)

    def serialize(self) -> Dict[str, Any]:
        return {"values": [info.to_payload() for info in self.values]}


def exception_info_for_error(exc: BaseException) -> ExceptionInfo:
    """Describe a single exception, without following its chain."""
    module = type(exc).__module__
    return ExceptionInfo(
        type=type(exc).__name__,
        value=str(exc) or type(exc).__name__,
        module=None if module == 'builtins' else module,
        frames=frames_from_traceback(exc.__traceback__),
    )


def _exception_chain(exc: Optional[BaseException]):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        if exc.__cause__ is not None:
            exc = exc.__cause__
        elif not exc.__suppress_context__:
            exc = exc.__context__
        else:
            exc = None


def exception(info: ExceptionInfo) -> Option:
    """Report a single, manually described exception."""
    return ExceptionOption([info])


def exception_for_error(exc: Optional[BaseException]) -> Optional[Option]:
    """
    Report an exception along with everything that caused it.

    The chain is followed through ``__cause__`` and, unless suppressed,
    ``__context__``.

    Returns:
        The option, or None when exc is None
    """
    if exc is None:
        return None
    return ExceptionOption([exception_info_for_error(e) for e in _exception_chain(exc)])
