"""Process-wide convenience layer over a single :class:`LogManager`.

Purpose
-------
Hosts that prefer module-level calls (``lib_log_channels.info("...")``) get a
global manager installed by :func:`init`. The core stays explicit: everything
here simply forwards to the installed :class:`LogManager`.

Contents
--------
* :func:`init`, :func:`set_manager`, :func:`get_manager`, :func:`shutdown` –
  lifecycle of the global manager.
* :func:`channel`, :func:`default` – logger accessors that raise
  :class:`NotInitialisedError` when nothing is installed.
* :func:`share_context` and the level functions – silent no-ops while
  uninitialised.

System Role
-----------
Outer shell. Logging must never crash the host, so the level functions also
stay silent when the default channel cannot be built; the failure is logged
at debug level.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

from lib_log_channels.application.logger import ChannelLogger
from lib_log_channels.config import LoggingConfig
from lib_log_channels.domain.levels import Level
from lib_log_channels.domain.results import DeliveryResult
from lib_log_channels.errors import ConfigurationError
from lib_log_channels.manager import LogManager

from . import _state
from ._state import is_initialised

LOGGER = logging.getLogger(__name__)


def init(config: LoggingConfig | None = None, **manager_options: Any) -> LogManager:
    """Build and install the process-wide manager.

    ``manager_options`` are forwarded to :class:`LogManager` (``registry``,
    ``clock``, ``diagnostic_hook``).

    Raises
    ------
    RuntimeError
        A manager is already installed; call :func:`shutdown` first.
    """

    with _state._STATE_LOCK:
        if _state.is_initialised():
            raise RuntimeError(
                "lib_log_channels.init() cannot be called twice without shutdown(); call lib_log_channels.shutdown() first",
            )
        manager = LogManager(config, **manager_options)
        _state.set_manager(manager)
    return manager


def set_manager(manager: LogManager) -> None:
    """Install an externally built manager, replacing any active one."""

    _state.set_manager(manager)


def get_manager() -> LogManager:
    """Return the installed manager or raise :class:`NotInitialisedError`."""

    return _state.current_manager()


def shutdown() -> DeliveryResult:
    """Close and uninstall the global manager; a no-op success when none is active."""

    manager = _state.clear_manager()
    if manager is None:
        return DeliveryResult.success("manager")
    return manager.close()


def channel(name: str) -> ChannelLogger:
    """Return a logger for channel ``name`` of the global manager."""

    return _state.current_manager().get_channel(name)


def default() -> ChannelLogger:
    """Return a logger for the default channel of the global manager."""

    return _state.current_manager().get_default()


def share_context(mapping: Mapping[str, Any] | None = None, /, **values: Any) -> None:
    """Share context through the global manager; ignored when uninitialised."""

    manager = _state.peek_manager()
    if manager is not None:
        manager.share_context(mapping, **values)


def _default_logger() -> ChannelLogger | None:
    manager = _state.peek_manager()
    if manager is None:
        return None
    try:
        return manager.get_default()
    except ConfigurationError as exc:
        LOGGER.debug("default channel %s unavailable: %s", manager.default_channel, exc)
        return None


def log(level: Level | str, message: str, *contexts: Mapping[str, Any] | None) -> None:
    logger = _default_logger()
    if logger is not None:
        logger.log(level, message, *contexts)


def debug(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.DEBUG, message, *contexts)


def info(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.INFO, message, *contexts)


def notice(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.NOTICE, message, *contexts)


def warning(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.WARNING, message, *contexts)


def error(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.ERROR, message, *contexts)


def critical(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.CRITICAL, message, *contexts)


def alert(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.ALERT, message, *contexts)


def emergency(message: str, *contexts: Mapping[str, Any] | None) -> None:
    log(Level.EMERGENCY, message, *contexts)


def _log_exception(level: Level, message: str, exc: BaseException | None, contexts: tuple[Mapping[str, Any] | None, ...]) -> None:
    logger = _default_logger()
    if logger is None:
        return
    if exc is None:
        logger.log(level, message, *contexts)
    else:
        logger.log_with_exception(level, message, exc, *contexts)


def error_with_exception(message: str, exc: BaseException, *contexts: Mapping[str, Any] | None) -> None:
    _log_exception(Level.ERROR, message, exc, contexts)


def critical_with_exception(message: str, exc: BaseException, *contexts: Mapping[str, Any] | None) -> None:
    _log_exception(Level.CRITICAL, message, exc, contexts)


def alert_with_exception(message: str, exc: BaseException, *contexts: Mapping[str, Any] | None) -> None:
    _log_exception(Level.ALERT, message, exc, contexts)


def emergency_with_exception(message: str, exc: BaseException, *contexts: Mapping[str, Any] | None) -> None:
    _log_exception(Level.EMERGENCY, message, exc, contexts)


def exception(message: str, *contexts: Mapping[str, Any] | None) -> None:
    """Log at ERROR with the exception currently being handled."""

    _log_exception(Level.ERROR, message, sys.exc_info()[1], contexts)


__all__ = [
    "alert",
    "alert_with_exception",
    "channel",
    "critical",
    "critical_with_exception",
    "debug",
    "default",
    "emergency",
    "emergency_with_exception",
    "error",
    "error_with_exception",
    "exception",
    "get_manager",
    "info",
    "init",
    "is_initialised",
    "log",
    "notice",
    "set_manager",
    "share_context",
    "shutdown",
    "warning",
]
