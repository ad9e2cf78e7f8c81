from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


def _now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


class Breadcrumb(BaseModel):
    """
    An action which took place in the application leading up to an event.

    The ``with_*`` methods update the breadcrumb in place and return it,
    so they can be chained straight after creating it:

        breadcrumbs.new_default(None).with_category("auth").with_message("Logged in")
    """
    timestamp: int = Field(default_factory=_now)
    type: Optional[str] = None
    message: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    category: Optional[str] = None
    level: Optional[str] = None

    def with_message(self, message: str) -> "Breadcrumb":
        self.message = message
        return self

    def with_category(self, category: str) -> "Breadcrumb":
        self.category = category
        return self

    def with_level(self, level) -> "Breadcrumb":
        self.level = getattr(level, 'value', level)
        return self

    def with_timestamp(self, timestamp: datetime) -> "Breadcrumb":
        self.timestamp = int(timestamp.timestamp())
        return self

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        if not payload.get('data'):
            payload.pop('data', None)
        return payload
