"""Exception hierarchy for configuration and lifecycle failures.

Delivery problems are never raised; drivers report them through
:class:`~lib_log_channels.domain.results.DeliveryResult`. The exceptions below
cover the cases that must reach the caller: building channels from
configuration and using the process-wide runtime before it exists.
"""

from __future__ import annotations


class LogChannelsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LogChannelsError, ValueError):
    """Channel or driver configuration cannot be turned into a channel."""


class ChannelNotFoundError(ConfigurationError):
    """The requested channel name is not configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"channel [{name}] is not defined")
        self.name = name


class DriverNotSupportedError(ConfigurationError):
    """No factory is registered for the configured driver kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"driver [{kind}] is not supported")
        self.kind = kind


class DriverConfigurationError(ConfigurationError):
    """A driver factory rejected its configuration or could not start."""


class NotInitialisedError(LogChannelsError, RuntimeError):
    """The process-wide runtime was used before :func:`lib_log_channels.init`."""

    def __init__(self) -> None:
        super().__init__("lib_log_channels.init() must be called before using the logging API")


__all__ = [
    "ChannelNotFoundError",
    "ConfigurationError",
    "DriverConfigurationError",
    "DriverNotSupportedError",
    "LogChannelsError",
    "NotInitialisedError",
]
