"""Composition root owning channels, shared context and the driver registry.

Purpose
-------
:class:`LogManager` is the sole authority over the channel cache: it builds
each configured channel at most once, hands out
:class:`~lib_log_channels.application.logger.ChannelLogger` snapshots, keeps
the context shared by every channel, and tears all drivers down on close.

Contents
--------
* :class:`LogManager` – explicit, instantiable manager (no global state).

System Role
-----------
Wires configuration (:mod:`lib_log_channels.config`), the driver registry
(:func:`lib_log_channels.adapters.default_registry`) and the application use
cases together. The process-wide convenience layer lives in
:mod:`lib_log_channels.runtime`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from threading import RLock
from types import TracebackType
from typing import Any

from .adapters import SystemClock, default_registry
from .adapters.stack import StackDriver
from .application.channel import Channel
from .application.diagnostics import DiagnosticHook, build_diagnostic_emitter
from .application.logger import ChannelLogger
from .application.ports.driver import DriverFactory
from .application.ports.time import ClockPort
from .application.registry import DriverRegistry
from .application.use_cases.build_channel import create_channel
from .application.use_cases.shutdown import close_drivers
from .config import LoggingConfig, default_config
from .domain.context import merge_context
from .domain.results import DeliveryResult

LOGGER = logging.getLogger(__name__)


class LogManager:
    """Manage named channels built from a :class:`LoggingConfig`.

    Parameters
    ----------
    config:
        Channel table and default channel; :func:`default_config` when ``None``.
    registry:
        Driver registry to use; a fresh :func:`default_registry` when ``None``.
        The manager owns it, so :meth:`register_driver` never leaks into other
        managers.
    clock:
        Time source for entry timestamps.
    diagnostic_hook:
        Optional ``hook(event_name, payload)`` observing channel creation,
        skipped stack members, delivery failures and teardown.

    Examples
    --------
    >>> import tempfile
    >>> from pathlib import Path
    >>> from lib_log_channels.config import LoggingConfig, file_channel
    >>> path = Path(tempfile.mkdtemp()) / "app.log"
    >>> with LogManager(LoggingConfig(default="app", channels={"app": file_channel(str(path))})) as manager:
    ...     manager.get_default().with_context(user_id=7).info("signed in")
    >>> "User_Id: 7" in path.read_text(encoding="utf-8")
    True
    """

    def __init__(
        self,
        config: LoggingConfig | None = None,
        *,
        registry: DriverRegistry | None = None,
        clock: ClockPort | None = None,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        self._config = config or default_config()
        self._registry = registry if registry is not None else default_registry()
        self._clock = clock or SystemClock()
        self._diagnostic = build_diagnostic_emitter(diagnostic_hook)
        self._lock = RLock()
        self._channels: dict[str, Channel] = {}
        self._default = self._config.default
        self._shared: dict[str, Any] = {}

    @property
    def config(self) -> LoggingConfig:
        return self._config

    @property
    def registry(self) -> DriverRegistry:
        return self._registry

    @property
    def default_channel(self) -> str:
        return self._default

    def set_default(self, name: str) -> None:
        """Make ``name`` the channel returned by :meth:`get_default`."""

        with self._lock:
            self._default = name

    def register_driver(self, kind: str, factory: DriverFactory) -> None:
        """Bind a custom driver kind for channels not built yet."""

        self._registry.register(kind, factory)

    def get_channel(self, name: str) -> ChannelLogger:
        """Return a logger for channel ``name``, building the channel on first use.

        Raises
        ------
        ConfigurationError
            The channel is unknown or its driver cannot be built.
        """

        channel = self._channels.get(name)
        if channel is None:
            with self._lock:
                channel = self._channels.get(name)
                if channel is None:
                    channel = create_channel(
                        name,
                        self._config.channels,
                        self._registry,
                        stack_factory=StackDriver,
                        diagnostic=self._diagnostic,
                    )
                    self._channels[name] = channel
                    LOGGER.debug("channel %s created with driver %s", name, channel.driver.name)
        return self._logger_for(channel)

    channel = get_channel

    def get_default(self) -> ChannelLogger:
        """Return a logger for the current default channel."""

        return self.get_channel(self._default)

    default = get_default

    def _logger_for(self, channel: Channel) -> ChannelLogger:
        with self._lock:
            snapshot = merge_context(channel.context, self._shared)
        return ChannelLogger(channel, clock=self._clock, context=snapshot, diagnostic=self._diagnostic)

    def share_context(self, mapping: Mapping[str, Any] | None = None, /, **values: Any) -> None:
        """Add context to every channel, including those already built.

        Loggers handed out earlier keep their snapshot and do not see the
        update.
        """

        update = merge_context(mapping, values)
        with self._lock:
            self._shared.update(update)
            for channel in self._channels.values():
                channel.context.update(update)

    def shared_context(self) -> dict[str, Any]:
        """Return a copy of the shared context."""

        with self._lock:
            return dict(self._shared)

    def flush_shared_context(self) -> None:
        """Forget the shared context; already patched channels keep their copy."""

        with self._lock:
            self._shared = {}

    def channels(self) -> tuple[str, ...]:
        """Return the names of the channels built so far."""

        with self._lock:
            return tuple(self._channels)

    def close(self) -> DeliveryResult:
        """Close every built driver and empty the cache; the last failure wins."""

        with self._lock:
            channels = list(self._channels.values())
            self._channels = {}
        result = close_drivers([channel.driver for channel in channels])
        self._diagnostic(
            "closed",
            {"channels": [channel.name for channel in channels], "ok": result.ok, "reason": result.reason},
        )
        return result

    def __enter__(self) -> "LogManager":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LogManager(default={self._default!r}, channels={list(self._channels)})"


__all__ = ["LogManager"]
