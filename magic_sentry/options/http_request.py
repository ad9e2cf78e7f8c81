"""
HTTP Request Options.

Describe the HTTP request being handled when an event occurred, either from
a live request object or from a manually built HTTPRequestInfo.

``http_request()`` accepts an aiohttp ``web.Request`` or any object with the
same ``method``, ``url``, ``headers`` and ``remote`` attributes. Only the
method, URL, query string and env are captured by default; headers and
cookies are added with ``with_headers()`` and ``with_cookies()``. Query
values and header values whose names contain a sanitized field are masked.

Example:
    async def handler(request):
        request_client = client.with_options(
            http_request(request).with_cookies().with_headers(),
        )
        request_client.capture(message("Route not found: %s", request.path))
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from magic_sentry.models.http_request import HTTPRequestInfo
from magic_sentry.options.base import OmittableOption, Option

SANITIZED_VALUE = "********"
DEFAULT_SANITIZED_FIELDS = ("password",)


class HTTPRequestOption(Option, OmittableOption):
    """Snapshot of a live request, built when the event is serialized."""
    option_class = "request"

    def __init__(self, request: Any = None):
        self.request = request
        self.include_headers = False
        self.include_cookies = False
        self.data: Any = None
        self.sanitized_fields: List[str] = list(DEFAULT_SANITIZED_FIELDS)

    def with_headers(self) -> "HTTPRequestOption":
        self.include_headers = True
        return self

    def with_cookies(self) -> "HTTPRequestOption":
        self.include_cookies = True
        return self

    def with_data(self, data: Any) -> "HTTPRequestOption":
        """Attach the request body, or a summary of it."""
        self.data = data
        return self

    def sanitize(self, *fields: str) -> "HTTPRequestOption":
        """Mask query and header values whose names contain any of the fields."""
        self.sanitized_fields.extend(field.lower() for field in fields)
        return self

    def omit(self) -> bool:
        return self.request is None

    def _is_sanitized(self, name: str) -> bool:
        name = name.lower()
        return any(field in name for field in self.sanitized_fields)

    def _query(self, raw: str) -> str:
        pairs: List[Tuple[str, str]] = []
        for key, value in parse_qsl(raw, keep_blank_values=True):
            pairs.append((key, SANITIZED_VALUE if self._is_sanitized(key) else value))
        pairs.sort(key=lambda pair: pair[0])
        return urlencode(pairs)

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        for key, value in self.request.headers.items():
            if self._is_sanitized(key):
                value = SANITIZED_VALUE
            headers[key] = f"{headers[key]}, {value}" if key in headers else value
        return headers

    def build_info(self) -> HTTPRequestInfo:
        parts = urlsplit(str(self.request.url))
        info = HTTPRequestInfo(
            url=urlunsplit((parts.scheme, parts.netloc, parts.path, "", "")),
            method=self.request.method,
            query_string=self._query(parts.query),
            data=self.data,
        )

        remote = getattr(self.request, "remote", None)
        if remote:
            info.env["REMOTE_ADDR"] = remote
        if self.include_headers:
            info.headers = self._headers()
        if self.include_cookies:
            info.cookies = self.request.headers.get("Cookie", "")
        return info

    def serialize(self) -> Dict[str, Any]:
        return self.build_info().to_payload()


class HTTPRequestInfoOption(Option):
    option_class = "request"

    def __init__(self, info: HTTPRequestInfo):
        self.info = info

    def serialize(self) -> Dict[str, Any]:
        return self.info.to_payload()


def http_request(request: Any = None) -> HTTPRequestOption:
    """
    Describe the request being handled.

    Always returns an option; without a request it omits itself from the
    packet, so handlers may pass through whatever request they have.
    """
    return HTTPRequestOption(request)


def http_request_info(info: Optional[HTTPRequestInfo]) -> Optional[Option]:
    """
    Describe a request from manually gathered details, for servers which
    do not expose an aiohttp style request object.

    Example:
        http_request_info(HTTPRequestInfo(method="GET", url="http://example.com/my.url"))
    """
    if info is None:
        return None
    return HTTPRequestInfoOption(info)
