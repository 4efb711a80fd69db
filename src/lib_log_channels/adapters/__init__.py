"""Concrete drivers and the pre-seeded driver registry.

Contents
--------
* :class:`FileDriver`, :class:`WebhookDriver`, :class:`StackDriver`,
  :class:`ConsoleDriver` – driver implementations.
* :class:`SystemClock` – wall-clock adapter.
* :func:`default_registry` – fresh registry knowing the built-in kinds.
"""

from __future__ import annotations

from lib_log_channels.application.registry import DriverRegistry

from .clock import SystemClock
from .console import ConsoleDriver, create_console_driver
from .file import FileDriver, create_file_driver
from .stack import StackDriver
from .webhook import WebhookDriver, build_payload, create_webhook_driver


def default_registry() -> DriverRegistry:
    """Return a new registry bound to ``file``, ``webhook``/``slack`` and ``console``.

    Examples
    --------
    >>> default_registry().kinds()
    ('console', 'file', 'slack', 'webhook')
    """

    return DriverRegistry(
        {
            "file": create_file_driver,
            "webhook": create_webhook_driver,
            "slack": create_webhook_driver,
            "console": create_console_driver,
        }
    )


__all__ = [
    "ConsoleDriver",
    "FileDriver",
    "StackDriver",
    "SystemClock",
    "WebhookDriver",
    "build_payload",
    "create_console_driver",
    "create_file_driver",
    "create_webhook_driver",
    "default_registry",
]
