"""Use cases orchestrating channel construction and teardown."""

from __future__ import annotations

from .build_channel import build_stack_driver, create_channel, resolve_level
from .shutdown import close_drivers

__all__ = ["build_stack_driver", "close_drivers", "create_channel", "resolve_level"]
