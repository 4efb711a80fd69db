"""Multi-channel structured logging.

Callers emit leveled, context-enriched entries through a
:class:`~lib_log_channels.application.logger.ChannelLogger`; a
:class:`LogManager` routes them to named channels backed by file, webhook,
console or stack (fan-out) drivers.

Use :class:`LogManager` directly for explicit wiring, or the process-wide
helpers (:func:`init`, :func:`info`, :func:`shutdown` ...) re-exported from
:mod:`lib_log_channels.runtime`.
"""

from __future__ import annotations

from .adapters import ConsoleDriver, FileDriver, StackDriver, WebhookDriver, default_registry
from .application.logger import ChannelLogger
from .application.registry import DriverRegistry
from .config import (
    ChannelConfig,
    ConsoleConfig,
    FileConfig,
    LoggingConfig,
    StackConfig,
    WebhookConfig,
    config_from_mapping,
    console_channel,
    default_config,
    file_channel,
    load_config,
    stack_channel,
    webhook_channel,
)
from .domain import DeliveryResult, ExceptionInfo, Level, LogEntry
from .errors import (
    ChannelNotFoundError,
    ConfigurationError,
    DriverConfigurationError,
    DriverNotSupportedError,
    LogChannelsError,
    NotInitialisedError,
)
from .manager import LogManager
from .runtime import (
    alert,
    alert_with_exception,
    channel,
    critical,
    critical_with_exception,
    debug,
    default,
    emergency,
    emergency_with_exception,
    error,
    error_with_exception,
    exception,
    get_manager,
    info,
    init,
    is_initialised,
    log,
    notice,
    set_manager,
    share_context,
    shutdown,
    warning,
)

__all__ = [
    "ChannelConfig",
    "ChannelLogger",
    "ChannelNotFoundError",
    "ConfigurationError",
    "ConsoleConfig",
    "ConsoleDriver",
    "DeliveryResult",
    "DriverConfigurationError",
    "DriverNotSupportedError",
    "DriverRegistry",
    "ExceptionInfo",
    "FileConfig",
    "FileDriver",
    "Level",
    "LogChannelsError",
    "LogEntry",
    "LogManager",
    "LoggingConfig",
    "NotInitialisedError",
    "StackConfig",
    "StackDriver",
    "WebhookConfig",
    "WebhookDriver",
    "alert",
    "alert_with_exception",
    "channel",
    "config_from_mapping",
    "console_channel",
    "critical",
    "critical_with_exception",
    "debug",
    "default",
    "default_config",
    "default_registry",
    "emergency",
    "emergency_with_exception",
    "error",
    "error_with_exception",
    "exception",
    "file_channel",
    "get_manager",
    "info",
    "init",
    "is_initialised",
    "load_config",
    "log",
    "notice",
    "set_manager",
    "share_context",
    "shutdown",
    "stack_channel",
    "warning",
    "webhook_channel",
]
