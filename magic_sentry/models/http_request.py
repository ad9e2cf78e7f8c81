from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HTTPRequestInfo(BaseModel):
    """
    The HTTP request being handled when an event occurred.
    Empty fields are left out of the serialized request.
    """
    url: str = ""
    method: str = ""
    query_string: str = ""
    cookies: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    env: Dict[str, str] = Field(default_factory=dict)
    data: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in self.model_dump().items()
            if value not in (None, "", {})
        }
