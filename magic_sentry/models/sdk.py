from typing import List

from pydantic import BaseModel, Field


class SDKInfo(BaseModel):
    name: str
    version: str
    integrations: List[str] = Field(default_factory=list)
