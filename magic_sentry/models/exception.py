from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StackFrame(BaseModel):
    """A single frame of a stack trace, oldest frames first in a trace."""
    filename: str
    function: str
    module: Optional[str] = None
    lineno: Optional[int] = None
    abs_path: Optional[str] = None
    context_line: Optional[str] = None
    in_app: bool = False

    def is_internal(self, prefixes) -> bool:
        """Check whether this frame's module starts with one of the prefixes."""
        if not self.module:
            return False
        return any(
            self.module == prefix or self.module.startswith(prefix + '.')
            for prefix in prefixes
        )


class ExceptionInfo(BaseModel):
    """
    Details of an exception which occurred in the application.
    """
    type: str = "unknown"
    value: str = "An unknown error has occurred"
    module: Optional[str] = None
    thread_id: Optional[str] = None
    mechanism: Optional[str] = None
    frames: List[StackFrame] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude={'frames'}, exclude_none=True)
        if self.frames:
            payload['stacktrace'] = {
                'frames': [frame.model_dump(exclude_none=True) for frame in self.frames],
            }
        return payload
