"""Domain entities and value objects used by the channel engine."""

from __future__ import annotations

from .context import ContextKind, classify, drop_keys, freeze_context, merge_context, to_jsonable
from .events import MAX_TRACE_FRAMES, ExceptionInfo, LogEntry
from .levels import Level
from .results import DeliveryResult

__all__ = [
    "ContextKind",
    "DeliveryResult",
    "ExceptionInfo",
    "Level",
    "LogEntry",
    "MAX_TRACE_FRAMES",
    "classify",
    "drop_keys",
    "freeze_context",
    "merge_context",
    "to_jsonable",
]
