from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """
    The user affected by an event.
    Extra fields are flattened into the serialized user object.
    """
    id: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    ip_address: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update(self.model_dump(exclude={'extra'}, exclude_none=True))
        return payload
