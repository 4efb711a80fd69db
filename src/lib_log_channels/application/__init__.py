"""Application layer: ports, channel policy and use cases."""

from __future__ import annotations

from .channel import Channel
from .diagnostics import DiagnosticHook, build_diagnostic_emitter
from .logger import ChannelLogger
from .registry import DriverRegistry

__all__ = ["Channel", "ChannelLogger", "DiagnosticHook", "DriverRegistry", "build_diagnostic_emitter"]
