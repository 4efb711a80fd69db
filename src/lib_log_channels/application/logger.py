"""Per-channel logger handed out by the manager.

Purpose
-------
Give callers a small, immutable handle bound to one channel: level emitters,
exception-aware emitters and context derivation (``with_context``,
``with_value``, ``without_context``).

Contents
--------
* :class:`ChannelLogger` – the caller-facing logging API.

System Role
-----------
Application layer. Applies the channel's level filter, layers context
(logger snapshot, then call-site maps in argument order), builds the
:class:`~lib_log_channels.domain.events.LogEntry` and hands it to the channel
driver. Delivery failures never propagate to the caller; they are logged at
debug level and forwarded to the diagnostic hook.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

from lib_log_channels.domain.context import drop_keys, freeze_context, merge_context
from lib_log_channels.domain.events import ExceptionInfo, LogEntry
from lib_log_channels.domain.levels import Level
from lib_log_channels.domain.results import DeliveryResult

from .channel import Channel
from .diagnostics import DiagnosticEmitter, build_diagnostic_emitter
from .ports.time import ClockPort

LOGGER = logging.getLogger(__name__)

ContextArg = Mapping[str, Any] | None


class ChannelLogger:
    """Emit entries into one channel with an attached context snapshot.

    Instances are never mutated; the ``with_*`` helpers return new loggers
    sharing the same channel.
    """

    __slots__ = ("_channel", "_context", "_clock", "_diagnostic")

    def __init__(
        self,
        channel: Channel,
        *,
        clock: ClockPort,
        context: Mapping[str, Any] | None = None,
        diagnostic: DiagnosticEmitter | None = None,
    ) -> None:
        self._channel = channel
        self._context = freeze_context(context)
        self._clock = clock
        self._diagnostic = diagnostic or build_diagnostic_emitter(None)

    @property
    def channel_name(self) -> str:
        return self._channel.name

    @property
    def min_level(self) -> Level:
        return self._channel.min_level

    @property
    def context(self) -> Mapping[str, Any]:
        """Read-only view of the context attached to every entry."""

        return self._context

    def _derive(self, context: Mapping[str, Any]) -> "ChannelLogger":
        return ChannelLogger(self._channel, clock=self._clock, context=context, diagnostic=self._diagnostic)

    def with_context(self, mapping: ContextArg = None, /, **values: Any) -> "ChannelLogger":
        """Return a logger whose context is overlaid with ``mapping`` and ``values``."""

        return self._derive(merge_context(self._context, mapping, values))

    def with_value(self, key: str, value: Any) -> "ChannelLogger":
        """Return a logger with a single additional context entry."""

        return self._derive(merge_context(self._context, {key: value}))

    def without_context(self, *keys: str) -> "ChannelLogger":
        """Return a logger without the given context keys; missing keys are ignored."""

        return self._derive(drop_keys(self._context, keys))

    def log(self, level: Level | str, message: str, *contexts: ContextArg) -> None:
        """Emit ``message`` at ``level`` with optional call-site context maps."""

        self._emit(Level.coerce(level), message, contexts, None)

    def log_with_exception(self, level: Level | str, message: str, exc: BaseException, *contexts: ContextArg) -> None:
        """Emit ``message`` at ``level`` with ``exc`` described in the entry."""

        self._emit(Level.coerce(level), message, contexts, exc)

    def debug(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.DEBUG, message, contexts, None)

    def info(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.INFO, message, contexts, None)

    def notice(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.NOTICE, message, contexts, None)

    def warning(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.WARNING, message, contexts, None)

    def error(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.ERROR, message, contexts, None)

    def critical(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.CRITICAL, message, contexts, None)

    def alert(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.ALERT, message, contexts, None)

    def emergency(self, message: str, *contexts: ContextArg) -> None:
        self._emit(Level.EMERGENCY, message, contexts, None)

    def error_with_exception(self, message: str, exc: BaseException, *contexts: ContextArg) -> None:
        self._emit(Level.ERROR, message, contexts, exc)

    def critical_with_exception(self, message: str, exc: BaseException, *contexts: ContextArg) -> None:
        self._emit(Level.CRITICAL, message, contexts, exc)

    def alert_with_exception(self, message: str, exc: BaseException, *contexts: ContextArg) -> None:
        self._emit(Level.ALERT, message, contexts, exc)

    def emergency_with_exception(self, message: str, exc: BaseException, *contexts: ContextArg) -> None:
        self._emit(Level.EMERGENCY, message, contexts, exc)

    def exception(self, message: str, *contexts: ContextArg) -> None:
        """Emit at ERROR with the exception currently being handled, if any.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> class _Clock:
        ...     def now(self):
        ...         return datetime(2025, 1, 1, tzinfo=timezone.utc)
        >>> class _Driver:
        ...     name = "memory"
        ...     entries = []
        ...     def log(self, entry):
        ...         self.entries.append(entry)
        ...         return DeliveryResult.success(self.name)
        ...     def close(self):
        ...         return DeliveryResult.success(self.name)
        >>> driver = _Driver()
        >>> logger = ChannelLogger(Channel("app", driver), clock=_Clock())
        >>> try:
        ...     raise KeyError("job")
        ... except KeyError:
        ...     logger.exception("lookup failed")
        >>> driver.entries[0].exception.class_name
        'KeyError'
        """

        self._emit(Level.ERROR, message, contexts, sys.exc_info()[1])

    def _emit(
        self,
        level: Level,
        message: str,
        contexts: tuple[ContextArg, ...],
        exc: BaseException | None,
    ) -> None:
        channel = self._channel
        if not channel.accepts(level):
            return
        entry = LogEntry(
            message=message,
            level=level,
            timestamp=self._clock.now(),
            context=merge_context(self._context, *contexts),
            exception=ExceptionInfo.from_exception(exc) if exc is not None else None,
            channel=channel.name,
        )
        try:
            result = channel.driver.log(entry)
        except Exception as exc_info:  # noqa: BLE001
            result = DeliveryResult.failure(getattr(channel.driver, "name", "unknown"), str(exc_info), exc_info)
        if not result.ok:
            LOGGER.debug("delivery to channel %s failed: %s", channel.name, result.reason)
            self._diagnostic(
                "delivery_failed",
                {"channel": channel.name, "driver": result.driver, "level": level.name, "reason": result.reason},
            )

    def __repr__(self) -> str:
        return f"ChannelLogger(channel={self._channel.name!r}, min_level={self._channel.min_level.name})"


__all__ = ["ChannelLogger"]
