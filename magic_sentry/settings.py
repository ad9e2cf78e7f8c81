"""
Client Settings.

A declarative way to configure a client, for applications which keep their
configuration in files or environment variables rather than in code.
Settings translate into ordinary options, so anything set here can still be
overridden per event.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from magic_sentry.client import Client
from magic_sentry.options.base import Option
from magic_sentry.options.config import use_dsn, use_send_queue
from magic_sentry.options.metadata import (
    environment,
    extra,
    logger_name,
    release,
    server_name,
    tags,
)
from magic_sentry.options.severity import Severity, level
from magic_sentry.queue.sequential import SequentialSendQueue
from magic_sentry.util.const import ENV_DSN, ENV_ENVIRONMENT, ENV_RELEASE


@dataclass
class ClientSettings:
    """
    Settings for a root client.

    Attributes:
        enabled: Master switch; a disabled client never sends anything
        dsn: Where to send events, None to keep the default
            (``$SENTRY_DSN``)
        environment: Deployment environment, e.g. "production"
        release: Application version
        server_name: Host name override
        logger: Logger name reported with events
        level: Default severity of captured events
        send_queue_size: Give the client a private queue of this size
        tags: Tags added to every event
        extra: Extra data added to every event
    """

    enabled: bool = True
    dsn: Optional[str] = None

    environment: str = ""
    release: str = ""
    server_name: Optional[str] = None
    logger: Optional[str] = None

    level: Optional[Severity] = None

    send_queue_size: Optional[int] = None

    tags: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClientSettings":
        """
        Create settings from a dictionary (e.g., parsed from JSON or YAML).

        ```json
        {
          "preset": "production",
          "release": "1.4.2",
          "tags": {"region": "eu-west-1"}
        }
        ```

        Args:
            data: Settings values, optionally naming a preset to start from

        Returns:
            ClientSettings instance

        Raises:
            ValueError: If the preset or the level is unknown
        """
        if not data:
            return cls()

        data = dict(data)
        preset_name = data.pop("preset", None)
        base = get_preset(preset_name) if preset_name else cls()

        severity = data.get("level", base.level)
        if isinstance(severity, str):
            severity = Severity(severity.lower())

        return cls(
            enabled=data.get("enabled", base.enabled),
            dsn=data.get("dsn", base.dsn),
            environment=data.get("environment", base.environment),
            release=data.get("release", base.release),
            server_name=data.get("server_name", base.server_name),
            logger=data.get("logger", base.logger),
            level=severity,
            send_queue_size=data.get("send_queue_size", base.send_queue_size),
            tags=dict(data.get("tags", base.tags)),
            extra=dict(data.get("extra", base.extra)),
        )

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ClientSettings":
        """
        Create settings from environment variables.

        Reads ``SENTRY_DSN``, ``SENTRY_RELEASE`` and ``ENV`` / ``ENVIRONMENT``.
        """
        environ = os.environ if environ is None else environ
        env_name = next((environ[name] for name in ENV_ENVIRONMENT if environ.get(name)), "")
        return cls(
            dsn=environ.get(ENV_DSN) or None,
            release=environ.get(ENV_RELEASE, ""),
            environment=env_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "dsn": self.dsn,
            "environment": self.environment,
            "release": self.release,
            "server_name": self.server_name,
            "logger": self.logger,
            "level": self.level.value if self.level else None,
            "send_queue_size": self.send_queue_size,
            "tags": dict(self.tags),
            "extra": dict(self.extra),
        }

    def to_options(self) -> List[Option]:
        """
        Translate the settings into client options.

        The private send queue is not included; build_client() creates it.
        """
        options: List[Option] = []

        if not self.enabled:
            options.append(use_dsn(""))
        elif self.dsn is not None:
            options.append(use_dsn(self.dsn))

        if self.environment:
            options.append(environment(self.environment))
        if self.release:
            options.append(release(self.release))
        if self.server_name:
            options.append(server_name(self.server_name))
        if self.logger:
            options.append(logger_name(self.logger))
        if self.level is not None:
            options.append(level(self.level))
        if self.tags:
            options.append(tags(self.tags))
        if self.extra:
            options.append(extra(self.extra))

        return options

    def build_client(self, parent: Optional[Client] = None) -> Client:
        """
        Create a client configured by these settings.

        Args:
            parent: Client to inherit from, None for a root client
        """
        options: List[Optional[Option]] = list(self.to_options())
        if self.send_queue_size is not None:
            options.append(use_send_queue(SequentialSendQueue(self.send_queue_size)))
        return Client(*options, parent=parent)


def default_settings() -> ClientSettings:
    return ClientSettings()


def development_settings() -> ClientSettings:
    """Report everything, tagged as the development environment."""
    return ClientSettings(
        environment="development",
        level=Severity.DEBUG,
    )


def production_settings() -> ClientSettings:
    return ClientSettings(
        environment="production",
        level=Severity.ERROR,
    )


def disabled_settings() -> ClientSettings:
    """Capture events locally but never send them."""
    return ClientSettings(enabled=False, dsn="")


PRESETS = {
    "default": default_settings,
    "development": development_settings,
    "production": production_settings,
    "disabled": disabled_settings,
}


def get_preset(name: str) -> ClientSettings:
    """
    Get preset settings by name.

    Raises:
        ValueError: If the preset name is unknown
    """
    if name not in PRESETS:
        raise ValueError(
            f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}"
        )
    return PRESETS[name]()
