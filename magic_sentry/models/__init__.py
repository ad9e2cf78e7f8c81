from magic_sentry.models.breadcrumb import Breadcrumb
from magic_sentry.models.exception import ExceptionInfo, StackFrame
from magic_sentry.models.http_request import HTTPRequestInfo
from magic_sentry.models.sdk import SDKInfo
from magic_sentry.models.user import UserInfo

__all__ = [
    "Breadcrumb",
    "ExceptionInfo",
    "HTTPRequestInfo",
    "SDKInfo",
    "StackFrame",
    "UserInfo",
]
