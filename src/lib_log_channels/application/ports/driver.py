"""Driver port describing how channels hand entries to their backends.

Purpose
-------
Define the narrow contract every output driver (file, webhook, console,
stack fan-out or custom) fulfils so channels and the manager never depend on
concrete adapters.

Contents
--------
* :class:`DriverPort` – runtime-checkable protocol with ``log``/``close``.
* :data:`DriverFactory` – callable building a driver from a channel config.

System Role
-----------
Application boundary between channel policy and the adapters layer. Drivers
report failures through :class:`~lib_log_channels.domain.results.DeliveryResult`
and never raise from ``log`` or ``close``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lib_log_channels.domain.events import LogEntry
from lib_log_channels.domain.results import DeliveryResult

if TYPE_CHECKING:
    from lib_log_channels.config import ChannelConfig


@runtime_checkable
class DriverPort(Protocol):
    """Deliver log entries to one backend."""

    @property
    def name(self) -> str:
        """Stable identifier of the driver kind (``"file"``, ``"webhook"`` ...)."""
        ...

    def log(self, entry: LogEntry) -> DeliveryResult:
        """Deliver ``entry`` and report the outcome."""
        ...

    def close(self) -> DeliveryResult:
        """Release held resources; safe to call more than once."""
        ...


DriverFactory = Callable[["ChannelConfig"], DriverPort]


__all__ = ["DriverFactory", "DriverPort"]
