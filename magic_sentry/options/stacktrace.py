"""
Stack Trace Option.

Captures the frames leading up to an event, oldest first. Frames whose
module matches one of the internal prefixes are marked ``in_app`` when the
option is finalized, which lets Sentry tell your code apart from library
code.

Example:
    add_internal_prefixes("billing")

    client.capture(
        message("Invoice total mismatch"),
        stack_trace().with_internal_prefixes("payments"),
    )
"""

from __future__ import annotations

import inspect
import linecache
import os
import threading
import traceback
from types import FrameType, TracebackType
from typing import Any, Dict, Iterable, List, Optional, Tuple

from magic_sentry.models.exception import StackFrame
from magic_sentry.options.base import FinalizableOption, Option

_PACKAGE = __name__.split('.')[0]

_prefixes_lock = threading.Lock()
_default_internal_prefixes: Tuple[str, ...] = ("__main__",)


def add_internal_prefixes(*prefixes: str) -> None:
    """Add module prefixes treated as in-app by every new stack trace."""
    global _default_internal_prefixes
    with _prefixes_lock:
        _default_internal_prefixes = _default_internal_prefixes + tuple(
            prefix for prefix in prefixes if prefix not in _default_internal_prefixes
        )


def default_internal_prefixes() -> Tuple[str, ...]:
    return _default_internal_prefixes


def _build_frame(frame: FrameType, lineno: int) -> StackFrame:
    code = frame.f_code
    abs_path = code.co_filename
    context_line = linecache.getline(abs_path, lineno).strip() if lineno else ""
    return StackFrame(
        filename=os.path.basename(abs_path),
        function=code.co_name,
        module=frame.f_globals.get('__name__'),
        lineno=lineno,
        abs_path=abs_path,
        context_line=context_line or None,
    )


def _is_own_frame(frame: FrameType) -> bool:
    module = frame.f_globals.get('__name__') or ''
    return module == _PACKAGE or module.startswith(_PACKAGE + '.')


def frames_from_traceback(tb: Optional[TracebackType]) -> List[StackFrame]:
    """Extract the frames of a traceback, oldest first."""
    return [_build_frame(frame, lineno) for frame, lineno in traceback.walk_tb(tb)]


def current_frames() -> List[StackFrame]:
    """Extract the caller's stack, oldest first, leaving out this library's frames."""
    frames = [
        _build_frame(frame, lineno)
        for frame, lineno in traceback.walk_stack(inspect.currentframe())
        if not _is_own_frame(frame)
    ]
    frames.reverse()
    return frames


def classify_frames(frames: Iterable[StackFrame], prefixes: Iterable[str]) -> None:
    prefixes = tuple(prefixes)
    for frame in frames:
        frame.in_app = frame.is_internal(prefixes)


class StackTraceOption(Option, FinalizableOption):
    option_class = "stacktrace"

    def __init__(self, frames: Optional[List[StackFrame]] = None):
        self.frames: List[StackFrame] = frames if frames is not None else []
        self.internal_prefixes: Tuple[str, ...] = default_internal_prefixes()

    def for_error(self, exc: BaseException) -> "StackTraceOption":
        """Replace the frames with those of the exception's traceback."""
        self.frames = frames_from_traceback(exc.__traceback__)
        return self

    def with_internal_prefixes(self, *prefixes: str) -> "StackTraceOption":
        self.internal_prefixes = self.internal_prefixes + prefixes
        return self

    def finalize(self) -> None:
        classify_frames(self.frames, self.internal_prefixes)

    def serialize(self) -> Dict[str, Any]:
        return {"frames": [frame.model_dump(exclude_none=True) for frame in self.frames]}


def stack_trace() -> StackTraceOption:
    """Capture the current call stack."""
    return StackTraceOption(current_frames())
