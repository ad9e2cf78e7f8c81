from enum import Enum

from magic_sentry.options.base import Option
from magic_sentry.registry import add_default_option_provider


class Severity(Enum):
    """
    Severity of an event, from fatal down to debug.

    - FATAL: Errors which cause the application to exit
    - ERROR: Errors which break the expected application flow
    - WARNING: Abnormal events which don't stop the application
    - INFO: Notable events during normal operation
    - DEBUG: Verbose information about normal operation
    """
    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


class LevelOption(Option):
    option_class = "level"

    def __init__(self, severity: Severity):
        self.severity = severity

    def serialize(self) -> str:
        return self.severity.value


def level(severity) -> Option:
    """Set the severity of the event. Accepts a Severity or its name."""
    if not isinstance(severity, Severity):
        severity = Severity(str(severity).lower())
    return LevelOption(severity)


# Events are errors unless told otherwise
add_default_option_provider(lambda: LevelOption(Severity.ERROR))
