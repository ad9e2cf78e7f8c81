"""
Built-in options for magic-sentry.

Importing this package registers the default option providers, in the
order the modules are listed below.
"""

from magic_sentry.options.base import (
    AdvancedOption,
    FinalizableOption,
    MergeableOption,
    OmittableOption,
    Option,
    OptionProvider,
    fold_options,
)
from magic_sentry.options.config import (
    Config,
    DSNOption,
    EventConfig,
    SendQueueOption,
    TransportOption,
    resolve_config,
    use_dsn,
    use_send_queue,
    use_transport,
)
from magic_sentry.options.event import (
    EventIDOption,
    MessageOption,
    TimestampOption,
    event_id,
    message,
    new_event_id,
    timestamp,
)
from magic_sentry.options.severity import LevelOption, Severity, level
from magic_sentry.options.metadata import (
    CulpritOption,
    EnvironmentOption,
    ExtraOption,
    FingerprintOption,
    LoggerOption,
    ModulesOption,
    PlatformOption,
    ReleaseOption,
    ServerNameOption,
    TagsOption,
    culprit,
    environment,
    extra,
    fingerprint,
    logger_name,
    modules,
    platform,
    release,
    server_name,
    tags,
)
from magic_sentry.options.contexts import ContextOption, context
from magic_sentry.options.sdk import SDKOption
from magic_sentry.options.user import UserOption, user
from magic_sentry.options.http_request import (
    HTTPRequestInfoOption,
    HTTPRequestOption,
    http_request,
    http_request_info,
)
from magic_sentry.options.unset import UnsetOption, unset
from magic_sentry.options.stacktrace import (
    StackTraceOption,
    add_internal_prefixes,
    stack_trace,
)
from magic_sentry.options.exception import (
    ExceptionOption,
    exception,
    exception_for_error,
)
from magic_sentry.options.breadcrumbs import (
    BreadcrumbsList,
    BreadcrumbsOption,
    breadcrumbs,
    default_breadcrumbs,
)

__all__ = [
    # capabilities
    "AdvancedOption",
    "FinalizableOption",
    "MergeableOption",
    "OmittableOption",
    "Option",
    "OptionProvider",
    "fold_options",
    # config
    "Config",
    "DSNOption",
    "EventConfig",
    "SendQueueOption",
    "TransportOption",
    "resolve_config",
    "use_dsn",
    "use_send_queue",
    "use_transport",
    # event
    "EventIDOption",
    "MessageOption",
    "TimestampOption",
    "event_id",
    "message",
    "new_event_id",
    "timestamp",
    "LevelOption",
    "Severity",
    "level",
    # metadata
    "CulpritOption",
    "EnvironmentOption",
    "ExtraOption",
    "FingerprintOption",
    "LoggerOption",
    "ModulesOption",
    "PlatformOption",
    "ReleaseOption",
    "ServerNameOption",
    "TagsOption",
    "culprit",
    "environment",
    "extra",
    "fingerprint",
    "logger_name",
    "modules",
    "platform",
    "release",
    "server_name",
    "tags",
    "ContextOption",
    "context",
    "SDKOption",
    "UserOption",
    "user",
    "HTTPRequestInfoOption",
    "HTTPRequestOption",
    "http_request",
    "http_request_info",
    "UnsetOption",
    "unset",
    # errors and traces
    "StackTraceOption",
    "add_internal_prefixes",
    "stack_trace",
    "ExceptionOption",
    "exception",
    "exception_for_error",
    # breadcrumbs
    "BreadcrumbsList",
    "BreadcrumbsOption",
    "breadcrumbs",
    "default_breadcrumbs",
]
