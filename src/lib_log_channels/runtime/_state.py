"""Process-wide manager slot and access helpers."""

from __future__ import annotations

from threading import RLock

from lib_log_channels.errors import NotInitialisedError
from lib_log_channels.manager import LogManager

_STATE: LogManager | None = None
_STATE_LOCK = RLock()


def set_manager(manager: LogManager) -> None:
    """Install ``manager`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = manager


def clear_manager() -> LogManager | None:
    """Remove and return the active manager if present."""

    with _STATE_LOCK:
        global _STATE
        manager, _STATE = _STATE, None
        return manager


def current_manager() -> LogManager:
    """Return the active manager or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise NotInitialisedError()
        return _STATE


def peek_manager() -> LogManager | None:
    """Return the active manager or ``None``."""

    with _STATE_LOCK:
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_log_channels.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "clear_manager",
    "current_manager",
    "is_initialised",
    "peek_manager",
    "set_manager",
]
