"""Console adapters."""

from __future__ import annotations

from .rich_console import ConsoleDriver, create_console_driver

__all__ = ["ConsoleDriver", "create_console_driver"]
