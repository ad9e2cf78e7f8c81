from typing import Any, Dict, Optional

from magic_sentry.models.user import UserInfo
from magic_sentry.options.base import Option


class UserOption(Option):
    option_class = "user"

    def __init__(self, info: UserInfo):
        self.info = info

    def serialize(self) -> Dict[str, Any]:
        return self.info.to_payload()


def user(info: Optional[UserInfo]) -> Optional[Option]:
    """
    Describe the user affected by the event.

    Example:
        client.capture(user(UserInfo(id="17", email="jane@example.com")))
    """
    if info is None:
        return None
    return UserOption(info)
