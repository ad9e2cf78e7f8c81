"""
Metadata Options.

Simple descriptive fields of an event:

- Mapping options (tags, extra, modules) which merge with earlier values
  of the same kind, newer keys winning
- Single value options (server name, environment, release, logger,
  platform, culprit) where the latest value wins
- Fingerprint, which controls how events are grouped

Example:
    client = new_client(tags({"service": "billing"}), environment("prod"))
    client.capture(tags({"customer": "42"}))  # sends both tags
"""

from __future__ import annotations

import functools
import importlib.metadata
import os
import socket
from typing import Any, Dict, List, Optional

from magic_sentry.options.base import MergeableOption, OmittableOption, Option
from magic_sentry.registry import add_default_option_provider
from magic_sentry.util.const import ENV_ENVIRONMENT, ENV_RELEASE


class MappingOption(Option, MergeableOption):
    """Base for options holding a mapping which merges key by key."""
    option_class = "mapping"

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(values or {})

    def merge(self, old: Option) -> Option:
        if not isinstance(old, type(self)):
            return self
        return type(self)({**old.values, **self.values})

    def serialize(self) -> Dict[str, Any]:
        return dict(self.values)


class TagsOption(MappingOption):
    option_class = "tags"


class ExtraOption(MappingOption):
    option_class = "extra"


class ModulesOption(MappingOption):
    option_class = "modules"


def tags(values: Dict[str, str]) -> Option:
    """Add searchable tags to the event."""
    return TagsOption({str(k): str(v) for k, v in values.items()})


def extra(values: Dict[str, Any]) -> Option:
    """Add arbitrary, non-searchable metadata to the event."""
    return ExtraOption(values)


def modules(versions: Dict[str, str]) -> Option:
    """Report the versions of modules used by the application."""
    return ModulesOption(versions)


class ValueOption(Option):
    """Base for options holding a single string value."""
    option_class = "value"

    def __init__(self, value: str):
        self.value = value

    def serialize(self) -> str:
        return self.value


class ServerNameOption(ValueOption):
    option_class = "server_name"


class EnvironmentOption(ValueOption, OmittableOption):
    option_class = "environment"

    def omit(self) -> bool:
        return not self.value


class ReleaseOption(ValueOption, OmittableOption):
    option_class = "release"

    def omit(self) -> bool:
        return not self.value


class LoggerOption(ValueOption):
    option_class = "logger"


class PlatformOption(ValueOption):
    option_class = "platform"


class CulpritOption(ValueOption):
    option_class = "culprit"


def server_name(hostname: str) -> Option:
    """Set the host name reported with the event (defaults to this host)."""
    return ServerNameOption(hostname)


def environment(name: str) -> Option:
    """Set the environment, e.g. "production". Empty names are omitted."""
    return EnvironmentOption(name)


def release(version: str) -> Option:
    """Set the application release. Empty versions are omitted."""
    return ReleaseOption(version)


def logger_name(name: str) -> Option:
    """Set the name of the logger which produced the event."""
    return LoggerOption(name)


def platform(name: str) -> Option:
    """Set the platform the event originated from (defaults to "python")."""
    return PlatformOption(name)


def culprit(text: str) -> Option:
    """Set the culprit, usually the function or route at fault."""
    return CulpritOption(text)


class FingerprintOption(Option):
    option_class = "fingerprint"

    def __init__(self, keys: List[str]):
        self.keys = keys

    def serialize(self) -> List[str]:
        return list(self.keys)


def fingerprint(*keys: str) -> Option:
    """
    Control how events are grouped.

    Example:
        fingerprint("{{ default }}", "http://example.com/my.url")
        fingerprint("myrpc", "POST", "/foo.bar")
    """
    return FingerprintOption(list(keys))


def _hostname() -> Optional[Option]:
    try:
        return ServerNameOption(socket.gethostname())
    except OSError:
        return None


def _environment_from_env() -> Optional[Option]:
    for name in ENV_ENVIRONMENT:
        value = os.environ.get(name)
        if value:
            return EnvironmentOption(value)
    return None


def _release_from_env() -> Optional[Option]:
    value = os.environ.get(ENV_RELEASE)
    if not value:
        return None
    return ReleaseOption(value)


@functools.lru_cache(maxsize=None)
def _installed_distributions() -> Dict[str, str]:
    versions = {}
    for dist in importlib.metadata.distributions():
        name = dist.metadata.get("Name")
        if name:
            versions[name] = dist.version
    return versions


def _installed_modules() -> Optional[Option]:
    return ModulesOption(_installed_distributions())


add_default_option_provider(_hostname)
add_default_option_provider(_environment_from_env)
add_default_option_provider(_release_from_env)
add_default_option_provider(lambda: LoggerOption("root"))
add_default_option_provider(lambda: PlatformOption("python"))
add_default_option_provider(_installed_modules)
