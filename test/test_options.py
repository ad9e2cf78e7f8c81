import os
import re
import sys
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from urllib.parse import urlencode

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from aiohttp.test_utils import make_mocked_request

from magic_sentry import (
    BreadcrumbsList,
    ExceptionInfo,
    HTTPRequestInfo,
    Packet,
    Severity,
    UserInfo,
    breadcrumbs,
    context,
    culprit,
    environment,
    event_id,
    exception,
    exception_for_error,
    extra,
    fingerprint,
    http_request,
    http_request_info,
    level,
    message,
    modules,
    new_event_id,
    release,
    server_name,
    stack_trace,
    tags,
    timestamp,
    unset,
    use_dsn,
    use_send_queue,
    use_transport,
    user,
)
from magic_sentry.options.breadcrumbs import default_breadcrumbs


class TestEventOptions:
    """Event ID, timestamp, message and level."""

    def test_new_event_id_format(self):
        assert re.match(r"^[0-9a-f]{32}$", new_event_id())
        assert new_event_id() != new_event_id()

    def test_event_id_validation(self):
        assert event_id("not-an-id") is None
        assert event_id("") is None
        assert event_id("ABCDEF0123456789ABCDEF0123456789").serialize() == "abcdef0123456789abcdef0123456789"

    def test_timestamp_serialized_in_utc(self):
        local = datetime(2024, 3, 1, 14, 30, 5, tzinfo=timezone(timedelta(hours=2)))
        assert timestamp(local).serialize() == "2024-03-01T12:30:05"

    def test_message_without_params(self):
        assert message("plain").serialize() == {"message": "plain"}

    def test_message_with_params(self):
        payload = message("%d of %s", 3, "disks").serialize()
        assert payload == {"message": "%d of %s", "params": [3, "disks"], "formatted": "3 of disks"}

    def test_message_with_mismatched_template(self):
        payload = message("100% of %s", "x").serialize()
        assert payload == {"message": "100% of %s", "params": ["x"], "formatted": "100% of %s"}

        payload = message("%s and %s", "one").serialize()
        assert payload["formatted"] == "%s and %s"

    def test_level_accepts_enum_or_name(self):
        assert level(Severity.WARNING).serialize() == "warning"
        assert level("FATAL").serialize() == "fatal"

    def test_level_rejects_unknown_name(self):
        with pytest.raises(ValueError):
            level("catastrophic")


class TestMetadataOptions:
    """Tags, extra, modules and the simple value options."""

    def test_tags_values_are_strings(self):
        assert tags({"retries": 3}).serialize() == {"retries": "3"}

    def test_mapping_options_merge_per_kind(self):
        packet = Packet().set_options(
            extra({"a": 1}),
            modules({"aiohttp": "3.9.0"}),
            extra({"b": [1, 2]}),
            modules({"pydantic": "2.6.0"}),
        )
        assert packet["extra"].serialize() == {"a": 1, "b": [1, 2]}
        assert packet["modules"].serialize() == {"aiohttp": "3.9.0", "pydantic": "2.6.0"}

    def test_empty_environment_and_release_omitted(self):
        packet = Packet().set_options(environment(""), release(""))
        assert len(packet) == 0

    def test_value_options(self):
        packet = Packet().set_options(
            server_name("web-1"),
            environment("production"),
            release("1.4.2"),
            culprit("checkout.views.pay"),
        )
        assert packet.to_dict() == {
            "server_name": "web-1",
            "environment": "production",
            "release": "1.4.2",
            "culprit": "checkout.views.pay",
        }

    def test_fingerprint(self):
        assert fingerprint("{{ default }}", "payments").serialize() == ["{{ default }}", "payments"]

    def test_context_merge(self):
        packet = Packet().set_options(
            context("device", {"model": "rpi4"}),
            context("app", {"build": "17"}),
            context("device", {"model": "rpi5"}),
        )
        assert packet["contexts"].serialize() == {
            "device": {"model": "rpi5"},
            "app": {"build": "17"},
        }

    def test_user(self):
        assert user(None) is None

        info = UserInfo(id="17", email="jane@example.com", extra={"plan": "pro"})
        assert user(info).serialize() == {"id": "17", "email": "jane@example.com", "plan": "pro"}

    def test_unset_targets_class(self):
        option = unset("server_name")
        assert option.option_class == "server_name"

    def test_config_options_omitted(self):
        packet = Packet().set_options(
            use_dsn("https://key@example.com/1"),
            use_transport(object()),
            use_send_queue(object()),
        )
        assert len(packet) == 0

    def test_config_factories_accept_none(self):
        assert use_transport(None) is None
        assert use_send_queue(None) is None


class TestStackTrace:
    """Stack capture and in-app classification."""

    def test_frames_oldest_first(self):
        trace = stack_trace()
        assert trace.frames[-1].function == "test_frames_oldest_first"
        assert trace.frames[-1].module == __name__

    def test_library_frames_skipped(self):
        trace = stack_trace()
        assert not any((frame.module or "").startswith("magic_sentry") for frame in trace.frames)

    def test_in_app_marked_on_finalize(self):
        trace = stack_trace().with_internal_prefixes(__name__)
        assert not any(frame.in_app for frame in trace.frames)

        Packet().set_options(trace)

        assert trace.frames[-1].in_app is True
        pytest_frames = [f for f in trace.frames if (f.module or "").startswith("_pytest")]
        assert pytest_frames
        assert not any(frame.in_app for frame in pytest_frames)

    def test_for_error(self):
        try:
            raise ValueError("bad")
        except ValueError as e:
            trace = stack_trace().for_error(e)

        assert len(trace.frames) == 1
        assert trace.frames[0].function == "test_for_error"
        assert trace.frames[0].context_line == 'raise ValueError("bad")'

    def test_serialize(self):
        payload = stack_trace().serialize()
        assert payload["frames"][-1]["function"] == "test_serialize"


def _fail_inner():
    raise KeyError("inner")


def _fail_outer():
    try:
        _fail_inner()
    except KeyError as e:
        raise RuntimeError("outer") from e


class TestExceptionOption:
    """Exception chains and their merging."""

    def test_exception_for_none(self):
        assert exception_for_error(None) is None

    def test_chain_outermost_first(self):
        try:
            _fail_outer()
        except RuntimeError as e:
            option = exception_for_error(e)

        values = option.serialize()["values"]
        assert [v["type"] for v in values] == ["RuntimeError", "KeyError"]
        assert values[0]["value"] == "outer"
        assert values[1]["stacktrace"]["frames"][-1]["function"] == "_fail_inner"

    def test_implicit_context_followed(self):
        try:
            try:
                raise KeyError("first")
            except KeyError:
                raise ValueError("second")
        except ValueError as e:
            option = exception_for_error(e)

        assert [info.type for info in option.values] == ["ValueError", "KeyError"]

    def test_suppressed_context_not_followed(self):
        try:
            try:
                raise KeyError("first")
            except KeyError:
                raise ValueError("second") from None
        except ValueError as e:
            option = exception_for_error(e)

        assert [info.type for info in option.values] == ["ValueError"]

    def test_module_of_custom_exception(self):
        class PaymentError(Exception):
            pass

        option = exception_for_error(PaymentError("declined"))
        assert option.values[0].module == __name__
        assert option.values[0].frames == []

    def test_merge_puts_new_first(self):
        first = exception(ExceptionInfo(type="First"))
        second = exception(ExceptionInfo(type="Second"))
        packet = Packet().set_options(first, second)

        assert [v["type"] for v in packet["exception"].serialize()["values"]] == ["Second", "First"]
        assert len(first.values) == 1

    def test_default_info(self):
        payload = exception(ExceptionInfo()).serialize()["values"][0]
        assert payload == {"type": "unknown", "value": "An unknown error has occurred"}


class TestBreadcrumbs:
    """The breadcrumbs ring buffer and its option."""

    def test_default_breadcrumb(self):
        crumbs = BreadcrumbsList(3)
        crumb = crumbs.new_default(None)

        assert crumb.type is None
        assert crumb.data == {}
        assert crumbs.values() == [crumb]

    def test_navigation_and_http(self):
        crumbs = BreadcrumbsList(3)
        nav = crumbs.new_navigation("/from", "/to")
        http = crumbs.new_http_request("GET", "/test", 200, "OK")

        assert nav.type == "navigation"
        assert nav.data == {"from": "/from", "to": "/to"}
        assert http.type == "http"
        assert http.data == {"method": "GET", "url": "/test", "status_code": 200, "reason": "OK"}

    def test_keeps_newest(self):
        crumbs = BreadcrumbsList(3)
        for i in range(10):
            crumbs.new_default({"index": i})

        assert [c.data["index"] for c in crumbs.values()] == [7, 8, 9]

    def test_with_size(self):
        crumbs = BreadcrumbsList(5)
        for i in range(5):
            crumbs.new_default({"index": i})

        assert crumbs.with_size(2) is crumbs
        assert [c.data["index"] for c in crumbs.values()] == [3, 4]

        crumbs.with_size(0)
        assert len(crumbs) == 0
        crumbs.new_default(None)
        assert len(crumbs) == 0

    def test_fluent_setters(self):
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        crumb = (
            BreadcrumbsList(1)
            .new_default(None)
            .with_message("Logged in")
            .with_category("auth")
            .with_level(Severity.INFO)
            .with_timestamp(ts)
        )
        assert crumb.to_payload() == {
            "timestamp": int(ts.timestamp()),
            "message": "Logged in",
            "category": "auth",
            "level": "info",
        }

    def test_packet_holds_snapshot(self):
        crumbs = BreadcrumbsList(5)
        crumbs.new_default(None).with_message("before")

        packet = Packet().set_options(breadcrumbs(crumbs))
        crumbs.new_default(None).with_message("after")

        payload = packet["breadcrumbs"].serialize()
        assert [c["message"] for c in payload] == ["before"]

    def test_breadcrumbs_none(self):
        assert breadcrumbs(None) is None

    def test_default_list_is_shared(self):
        assert default_breadcrumbs() is default_breadcrumbs()


class TestHTTPRequest:
    """Snapshots of the request being handled."""

    def make_request(self):
        return make_mocked_request(
            "GET",
            "/test?testing=1&password=test",
            headers={
                "Host": "example.com",
                "Cookie": "testing=1",
                "X-Testing": "1",
                "X-API-Key": "secret",
            },
        )

    def test_omitted_without_request(self):
        option = http_request()
        assert option.option_class == "request"
        assert option.omit()
        assert len(Packet().set_options(option)) == 0

    def test_default_snapshot(self):
        packet = Packet().set_options(http_request(self.make_request()))

        assert packet["request"].serialize() == {
            "url": "http://example.com/test",
            "method": "GET",
            "query_string": urlencode([("password", "********"), ("testing", "1")]),
        }

    def test_with_headers_and_cookies(self):
        payload = http_request(self.make_request()).with_cookies().with_headers().serialize()

        assert payload["cookies"] == "testing=1"
        assert payload["headers"] == {
            "Host": "example.com",
            "Cookie": "testing=1",
            "X-Testing": "1",
            "X-API-Key": "secret",
        }

    def test_sanitize_headers_and_query(self):
        payload = http_request(self.make_request()).with_headers().sanitize("key", "testing").serialize()

        assert payload["headers"]["X-API-Key"] == "********"
        assert payload["headers"]["X-Testing"] == "********"
        assert payload["headers"]["Host"] == "example.com"
        assert payload["query_string"] == urlencode([("password", "********"), ("testing", "********")])

    def test_env_and_data_from_request_like_object(self):
        request = SimpleNamespace(
            method="POST",
            url="https://shop.example.com/orders?id=7",
            headers={"Cookie": "session=abc"},
            remote="10.0.0.5",
        )
        payload = http_request(request).with_data({"sku": "A-1"}).serialize()

        assert payload == {
            "url": "https://shop.example.com/orders",
            "method": "POST",
            "query_string": "id=7",
            "env": {"REMOTE_ADDR": "10.0.0.5"},
            "data": {"sku": "A-1"},
        }

    def test_manual_request_info(self):
        info = HTTPRequestInfo(
            url="http://example.com/my.url",
            method="GET",
            query_string="q=test",
            cookies="testing=1",
        )

        assert http_request_info(None) is None
        assert http_request_info(info).option_class == "request"
        assert http_request_info(info).serialize() == {
            "url": "http://example.com/my.url",
            "method": "GET",
            "query_string": "q=test",
            "cookies": "testing=1",
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
