from typing import Any, Dict

from magic_sentry.models.sdk import SDKInfo
from magic_sentry.options.base import Option
from magic_sentry.registry import add_default_option_provider
from magic_sentry.util.const import SDK_NAME, VERSION


class SDKOption(Option):
    """Identifies the library which produced the event."""
    option_class = "sdk"

    def __init__(self, info: SDKInfo):
        self.info = info

    def serialize(self) -> Dict[str, Any]:
        return self.info.model_dump()


add_default_option_provider(lambda: SDKOption(SDKInfo(name=SDK_NAME, version=VERSION)))
