"""Protocols separating channel policy from concrete adapters."""

from __future__ import annotations

from .driver import DriverFactory, DriverPort
from .time import ClockPort

__all__ = ["ClockPort", "DriverFactory", "DriverPort"]
