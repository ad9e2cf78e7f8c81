import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from magic_sentry import (
    Client,
    QueuedEvent,
    default_client,
    default_send_queue,
    default_transport,
    environment,
    logger_name,
    new_client,
    registry,
    set_default_send_queue,
    set_default_transport,
    tags,
    use_dsn,
    use_send_queue,
    use_transport,
)
from magic_sentry.util.const import CONFIG_OPTION_CLASSES, OPTION_CLASS_DSN


class RecordingQueue:
    """Completes every event immediately and remembers it."""

    def __init__(self):
        self.events = []
        self.closed = False

    def enqueue(self, config, packet):
        event = QueuedEvent(config, packet)
        self.events.append(event)
        event.complete(None)
        return event

    def shutdown(self, wait=False):
        self.closed = True


class NullTransport:
    def send(self, dsn, packet):
        pass


class TestClientHierarchy:
    """Options flowing from providers through parents to the call site."""

    def setup_method(self):
        self._providers = registry.replace_providers(())
        self.queue = RecordingQueue()

    def teardown_method(self):
        registry.replace_providers(self._providers)

    def test_capture_returns_the_queue_event(self):
        client = new_client(use_send_queue(self.queue))
        event = client.capture(logger_name("app"))

        assert self.queue.events == [event]
        assert event.packet["logger"].serialize() == "app"

    def test_capture_does_not_log(self, caplog):
        client = new_client(use_send_queue(self.queue))
        with caplog.at_level(logging.DEBUG, logger="magic_sentry"):
            client.capture(logger_name("app"))

        assert caplog.records == []

    def test_options_applied_root_first(self):
        root = new_client(use_send_queue(self.queue), tags({"level": "root", "root": "1"}))
        child = root.with_options(tags({"level": "child", "child": "1"}))
        grandchild = child.with_options(logger_name("grandchild"))

        event = grandchild.capture(tags({"call": "1"}))

        assert event.packet["tags"].serialize() == {
            "level": "child",
            "root": "1",
            "child": "1",
            "call": "1",
        }
        assert event.packet["logger"].serialize() == "grandchild"

    def test_call_site_options_win(self):
        client = new_client(use_send_queue(self.queue), logger_name("client"))
        event = client.capture(logger_name("call"))
        assert event.packet["logger"].serialize() == "call"

    def test_providers_come_before_client_options(self):
        registry.add_provider(lambda: logger_name("provider"))
        registry.add_provider(lambda: environment("staging"))

        client = new_client(use_send_queue(self.queue), logger_name("client"))
        event = client.capture()

        assert event.packet["logger"].serialize() == "client"
        assert event.packet["environment"].serialize() == "staging"

    def test_providers_evaluated_per_capture(self):
        counter = {"calls": 0}

        def provider():
            counter["calls"] += 1
            return tags({"call": str(counter["calls"])})

        registry.add_provider(provider)
        client = new_client(use_send_queue(self.queue))

        first = client.capture()
        second = client.capture()

        assert first.packet["tags"].serialize() == {"call": "1"}
        assert second.packet["tags"].serialize() == {"call": "2"}

    def test_provider_returning_none_adds_nothing(self):
        registry.add_provider(lambda: None)
        event = new_client(use_send_queue(self.queue)).capture()
        assert len(event.packet) == 0

    def test_children_do_not_affect_parent(self):
        root = new_client(use_send_queue(self.queue), logger_name("root"))
        root.with_options(logger_name("child"))

        assert root.get_option("logger").serialize() == "root"

    def test_config_options_never_reach_the_packet(self):
        client = new_client(
            use_dsn("https://key@example.com/1"),
            use_transport(NullTransport()),
            use_send_queue(self.queue),
        )
        event = client.capture()

        for option_class in CONFIG_OPTION_CLASSES:
            assert option_class not in event.packet


class TestClientConfig:
    """Resolving DSN, transport and queue."""

    def setup_method(self):
        self._providers = registry.replace_providers(())
        self.queue = RecordingQueue()

    def teardown_method(self):
        registry.replace_providers(self._providers)
        set_default_send_queue(None)
        set_default_transport(None)

    def test_get_option_returns_omittable_config_options(self):
        client = new_client(use_dsn("https://key@example.com/1"))
        option = client.get_option(OPTION_CLASS_DSN)

        assert option is not None
        assert option.dsn == "https://key@example.com/1"

    def test_get_option_missing_returns_none(self):
        assert new_client().get_option("tags") is None

    def test_get_option_merges(self):
        client = new_client(tags({"a": "1"})).with_options(tags({"b": "2"}))
        assert client.get_option("tags").serialize() == {"a": "1", "b": "2"}

    def test_closest_dsn_wins(self):
        root = new_client(use_dsn("https://root@example.com/1"), use_send_queue(self.queue))
        child = root.with_options(use_dsn("https://child@example.com/2"))

        assert root.dsn == "https://root@example.com/1"
        assert child.dsn == "https://child@example.com/2"

        event = child.capture(use_dsn(""))
        assert event.config.dsn == ""

    def test_missing_dsn_is_empty(self):
        assert new_client().dsn == ""

    def test_queue_and_transport_fall_back_to_registry(self):
        queue = RecordingQueue()
        transport = NullTransport()
        set_default_send_queue(queue)
        set_default_transport(transport)

        client = new_client()
        assert client.send_queue is queue
        assert client.transport is transport

        event = client.capture()
        assert queue.events == [event]
        assert event.config.transport is transport

    def test_use_send_queue_overrides_for_subtree(self):
        other = RecordingQueue()
        root = new_client(use_send_queue(self.queue))
        child = root.use_send_queue(other)

        child.capture()
        root.capture()

        assert len(other.events) == 1
        assert len(self.queue.events) == 1

    def test_use_send_queue_none_restores_default(self):
        default = RecordingQueue()
        set_default_send_queue(default)

        child = new_client(use_send_queue(self.queue)).use_send_queue(None)
        assert child.send_queue is default

    def test_use_transport(self):
        transport = NullTransport()
        client = new_client().use_transport(transport)

        assert client.transport is transport
        assert client.use_transport(None).transport is default_transport()

    def test_config_snapshot(self):
        client = new_client(use_dsn("https://key@example.com/1"), use_send_queue(self.queue))
        config = client.config()

        assert config.dsn == "https://key@example.com/1"
        assert config.send_queue is self.queue

    def test_registry_setters_restore_builtin_default(self):
        queue = RecordingQueue()
        set_default_send_queue(queue)
        assert default_send_queue() is queue

        set_default_send_queue(None)
        builtin = default_send_queue()
        assert builtin is not queue
        assert default_send_queue() is builtin


class TestCaptureHelpers:
    """capture_message, capture_exception and the default client."""

    def setup_method(self):
        self._providers = registry.replace_providers(())
        self.queue = RecordingQueue()
        self.client = new_client(use_send_queue(self.queue))

    def teardown_method(self):
        registry.replace_providers(self._providers)

    def test_capture_message(self):
        event = self.client.capture_message("disk almost full", tags({"disk": "sda"}))

        assert event.packet["sentry.interfaces.Message"].serialize() == {"message": "disk almost full"}
        assert event.packet["tags"].serialize() == {"disk": "sda"}

    def test_capture_exception_explicit(self):
        try:
            raise KeyError("missing")
        except KeyError as e:
            error = e

        event = self.client.capture_exception(error)
        values = event.packet["exception"].serialize()["values"]

        assert values[0]["type"] == "KeyError"

    def test_capture_exception_uses_current_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            event = self.client.capture_exception()

        values = event.packet["exception"].serialize()["values"]
        assert values[0]["type"] == "RuntimeError"
        assert values[0]["value"] == "boom"

    def test_capture_exception_without_exception(self):
        event = self.client.capture_exception()
        assert "exception" not in event.packet

    def test_default_client_is_shared(self):
        assert isinstance(default_client(), Client)
        assert default_client() is default_client()


class TestDefaultProviders:
    """The providers registered by the library itself."""

    def setup_method(self):
        self.queue = RecordingQueue()

    def test_default_packet_contents(self):
        event = new_client(use_send_queue(self.queue)).capture()
        packet = event.packet

        assert len(event.event_id) == 32
        assert packet["level"].serialize() == "error"
        assert packet["platform"].serialize() == "python"
        assert packet["logger"].serialize() == "root"
        assert packet["sdk"].serialize()["name"] == "magic-sentry"
        assert "runtime" in packet["contexts"].serialize()
        assert "os" in packet["contexts"].serialize()
        assert "timestamp" in packet
        assert "breadcrumbs" in packet

    def test_installed_modules_reported(self):
        packet = new_client(use_send_queue(self.queue)).capture().packet
        installed = packet["modules"].serialize()

        assert "pydantic" in installed
        assert "aiohttp" in installed

    def test_each_capture_gets_a_new_event_id(self):
        client = new_client(use_send_queue(self.queue))
        assert client.capture().event_id != client.capture().event_id


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
