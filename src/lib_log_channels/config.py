"""Configuration surface for managers, channels and drivers.

Purpose
-------
Describe which channels exist, which driver backs each of them and how the
drivers are tuned. Configuration can be built in code (dataclasses and the
``*_channel`` helpers), loaded from TOML/JSON files, and adjusted through
environment variables or a nearby ``.env`` file.

Contents
--------
* Dataclasses: :class:`LoggingConfig`, :class:`ChannelConfig`,
  :class:`FileConfig`, :class:`WebhookConfig`, :class:`StackConfig`,
  :class:`ConsoleConfig`.
* Builders: :func:`default_config`, :func:`file_channel`,
  :func:`webhook_channel`, :func:`stack_channel`, :func:`console_channel`.
* Loaders: :func:`config_from_mapping`, :func:`load_config`,
  :func:`apply_env_overrides`.
* ``.env`` support: :func:`enable_dotenv`, :func:`should_use_dotenv`.

System Role
-----------
Outer-shell input consumed by :class:`lib_log_channels.manager.LogManager`
and by the driver factories registered in
:func:`lib_log_channels.adapters.default_registry`.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError

DEFAULT_APP_NAME = "LogChannels"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_WEBHOOK_TIMEOUT = 10.0
DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True)
class FileConfig:
    """Settings of the append-only file driver.

    The rotation fields (``max_size`` in MB, ``max_backups``, ``max_age`` in
    days, ``compress``) are carried as metadata; no rotation is performed.
    """

    path: str = "logs/app.log"
    max_size: int = 100
    max_backups: int = 3
    max_age: int = 28
    compress: bool = True
    permission: str | None = None
    date_format: str = DEFAULT_DATE_FORMAT


@dataclass(slots=True)
class WebhookConfig:
    """Settings of the Slack-style webhook driver."""

    webhook_url: str = ""
    username: str = DEFAULT_APP_NAME
    icon_emoji: str = ":robot_face:"
    icon_url: str | None = None
    channel: str | None = None
    timeout: float = DEFAULT_WEBHOOK_TIMEOUT
    asynchronous: bool = False
    footer_icon: str | None = None


@dataclass(slots=True)
class StackConfig:
    """Member channel names of a fan-out channel and its failure tolerance."""

    channels: list[str] = field(default_factory=list)
    ignore_exceptions: bool = False


@dataclass(slots=True)
class ConsoleConfig:
    """Settings of the Rich console driver."""

    stream: str = "stderr"
    force_color: bool = False
    no_color: bool = False


@dataclass(slots=True)
class ChannelConfig:
    """Configuration of one named channel.

    Attributes
    ----------
    driver:
        Driver kind (``"file"``, ``"webhook"``/``"slack"``, ``"console"``,
        ``"stack"`` or any custom registered kind).
    level:
        Minimum level name; ``None`` selects the driver kind's default.
    file, webhook, stack, console:
        Driver-specific sections; only the one matching ``driver`` is read.
    options:
        Free-form settings for custom drivers.
    """

    driver: str
    level: str | None = None
    file: FileConfig | None = None
    webhook: WebhookConfig | None = None
    stack: StackConfig | None = None
    console: ConsoleConfig | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class LoggingConfig:
    """Root configuration: default channel, application name, channel table."""

    default: str = "file"
    app_name: str = DEFAULT_APP_NAME
    channels: dict[str, ChannelConfig] = field(default_factory=dict)


def file_channel(path: str, *, level: str | None = "debug", **options: Any) -> ChannelConfig:
    """Return a file channel writing to ``path``; ``options`` tune :class:`FileConfig`."""

    return ChannelConfig(driver="file", level=level, file=FileConfig(path=path, **options))


def webhook_channel(webhook_url: str, *, level: str | None = "error", **options: Any) -> ChannelConfig:
    """Return a webhook channel posting to ``webhook_url``; ``options`` tune :class:`WebhookConfig`."""

    return ChannelConfig(driver="webhook", level=level, webhook=WebhookConfig(webhook_url=webhook_url, **options))


def stack_channel(channels: Sequence[str], *, ignore_exceptions: bool = False, level: str | None = None) -> ChannelConfig:
    """Return a stack channel fanning out to the named member channels."""

    return ChannelConfig(driver="stack", level=level, stack=StackConfig(channels=list(channels), ignore_exceptions=ignore_exceptions))


def console_channel(*, level: str | None = "debug", **options: Any) -> ChannelConfig:
    """Return a console channel; ``options`` tune :class:`ConsoleConfig`."""

    return ChannelConfig(driver="console", level=level, console=ConsoleConfig(**options))


def default_config() -> LoggingConfig:
    """Return the configuration used when a manager is built without one."""

    return LoggingConfig(default="file", app_name=DEFAULT_APP_NAME, channels={"file": file_channel("logs/app.log")})


_FILE_KEYS = {
    "path": "path",
    "max_size": "max_size",
    "max_backups": "max_backups",
    "max_age": "max_age",
    "compress": "compress",
    "permission": "permission",
    "date_format": "date_format",
}
_WEBHOOK_KEYS = {
    "webhook_url": "webhook_url",
    "url": "webhook_url",
    "username": "username",
    "icon_emoji": "icon_emoji",
    "icon_url": "icon_url",
    "slack_channel": "channel",
    "channel": "channel",
    "timeout": "timeout",
    "async": "asynchronous",
    "asynchronous": "asynchronous",
    "footer_icon": "footer_icon",
}
_STACK_KEYS = {"channels": "channels", "ignore_exceptions": "ignore_exceptions"}
_CONSOLE_KEYS = {"stream": "stream", "force_color": "force_color", "no_color": "no_color"}

_SECTIONS: dict[str, tuple[str, type, dict[str, str]]] = {
    "file": ("file", FileConfig, _FILE_KEYS),
    "webhook": ("webhook", WebhookConfig, _WEBHOOK_KEYS),
    "slack": ("webhook", WebhookConfig, _WEBHOOK_KEYS),
    "stack": ("stack", StackConfig, _STACK_KEYS),
    "console": ("console", ConsoleConfig, _CONSOLE_KEYS),
}


def _channel_from_mapping(name: str, data: Any, app_name: str) -> ChannelConfig:
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"channel [{name}] must be a table/object, got {type(data).__name__}")
    payload = dict(data)
    kind = payload.pop("driver", None)
    if not isinstance(kind, str) or not kind.strip():
        raise ConfigurationError(f"channel [{name}] requires a driver")
    kind = kind.strip().lower()
    level = payload.pop("level", None)
    channel = ChannelConfig(driver=kind, level=str(level) if level is not None else None)

    section = _SECTIONS.get(kind)
    if section is None:
        channel.options = payload
        return channel

    attribute, section_type, aliases = section
    nested = payload.pop(attribute, None)
    source: dict[str, Any] = dict(nested) if isinstance(nested, Mapping) else {}
    values: dict[str, Any] = {}
    for key in list(payload):
        target = aliases.get(key)
        if target is not None:
            values[target] = payload.pop(key)
    for key, value in source.items():
        values[aliases.get(key, key)] = value
    if section_type is WebhookConfig:
        values.setdefault("username", app_name)
        if "timeout" in values:
            try:
                values["timeout"] = float(values["timeout"])
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"channel [{name}] has invalid webhook timeout: {exc}") from exc
    if section_type is StackConfig:
        members = values.get("channels", [])
        if isinstance(members, str) or not isinstance(members, Sequence):
            raise ConfigurationError(f"stack channel [{name}] requires a list of channel names")
        values["channels"] = [str(member) for member in members]
    try:
        setattr(channel, attribute, section_type(**values))
    except TypeError as exc:
        raise ConfigurationError(f"channel [{name}] has invalid {attribute} settings: {exc}") from exc
    channel.options = payload
    return channel


def config_from_mapping(data: Mapping[str, Any]) -> LoggingConfig:
    """Build a :class:`LoggingConfig` from plain data.

    Channel entries may either be flat (driver settings next to ``driver``
    and ``level``) or carry a nested section named after the driver kind.

    Examples
    --------
    >>> cfg = config_from_mapping({
    ...     "default": "app",
    ...     "channels": {"app": {"driver": "file", "path": "logs/app.log", "level": "info"}},
    ... })
    >>> cfg.channels["app"].file.path, cfg.channels["app"].level
    ('logs/app.log', 'info')
    """

    app_name = str(data.get("app_name", data.get("appName", DEFAULT_APP_NAME)))
    raw_channels = data.get("channels", {})
    if not isinstance(raw_channels, Mapping):
        raise ConfigurationError("channels must be a table/object keyed by channel name")
    channels = {str(name): _channel_from_mapping(str(name), entry, app_name) for name, entry in raw_channels.items()}
    return LoggingConfig(default=str(data.get("default", "file")), app_name=app_name, channels=channels)


def load_config(path: str | Path) -> LoggingConfig:
    """Load configuration from a ``.toml`` or ``.json`` file."""

    source = Path(path)
    suffix = source.suffix.lower()
    try:
        if suffix == ".toml":
            with source.open("rb") as handle:
                data = tomllib.load(handle)
        elif suffix == ".json":
            data = json.loads(source.read_text(encoding="utf-8"))
        else:
            raise ConfigurationError(f"unsupported configuration format: {source.name}")
    except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"cannot read configuration {source}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"configuration {source} must contain a table/object")
    return config_from_mapping(data)


def apply_env_overrides(config: LoggingConfig, environ: Mapping[str, str] | None = None) -> LoggingConfig:
    """Return ``config`` with ``LOG_DEFAULT_CHANNEL`` / ``LOG_APP_NAME`` applied."""

    env = os.environ if environ is None else environ
    changes: dict[str, str] = {}
    if env.get("LOG_DEFAULT_CHANNEL"):
        changes["default"] = env["LOG_DEFAULT_CHANNEL"]
    if env.get("LOG_APP_NAME"):
        changes["app_name"] = env["LOG_APP_NAME"]
    return replace(config, **changes) if changes else config


_DOTENV_LOADED: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is active; an explicit flag wins over the env toggle."""

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY or not normalized:
        return False
    raise ValueError(f"{DOTENV_ENV_VAR} must be a boolean flag, got {env_value!r}")


def enable_dotenv(path: str | Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    Searches upwards from the current working directory unless ``path`` is
    given. Returns the loaded file, or ``None`` when none was found. Loading
    happens once per process.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    candidate = str(path) if path is not None else find_dotenv(usecwd=True)
    if not candidate or not Path(candidate).is_file():
        return None
    resolved = Path(candidate).resolve()
    load_dotenv(resolved, override=False)
    _DOTENV_LOADED = resolved
    return resolved


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "ChannelConfig",
    "ConsoleConfig",
    "DEFAULT_APP_NAME",
    "DEFAULT_DATE_FORMAT",
    "DOTENV_ENV_VAR",
    "FileConfig",
    "LoggingConfig",
    "StackConfig",
    "WebhookConfig",
    "apply_env_overrides",
    "config_from_mapping",
    "console_channel",
    "default_config",
    "enable_dotenv",
    "file_channel",
    "load_config",
    "should_use_dotenv",
    "stack_channel",
    "webhook_channel",
]
