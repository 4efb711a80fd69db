"""Context maps attached to log entries.

Purpose
-------
Context values are caller controlled and may be of any type. This module
classifies them into a closed set of kinds so renderers can dispatch
exhaustively, and provides the merge helpers used for layering shared,
channel, logger and call-site context.

Contents
--------
* :class:`ContextKind` – tag describing a context value.
* :func:`classify` / :func:`to_jsonable` – value inspection and conversion.
* :func:`merge_context`, :func:`drop_keys`, :func:`freeze_context` – layering.

System Role
-----------
Domain-level helpers consumed by :class:`~lib_log_channels.domain.events.LogEntry`
and by the formatting code of the adapters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any

Context = Mapping[str, Any]


class ContextKind(Enum):
    """Tag of a context value."""

    NULL = "null"
    STRING = "string"
    BYTES = "bytes"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OPAQUE = "opaque"


def classify(value: Any) -> ContextKind:
    """Return the :class:`ContextKind` of ``value``.

    ``bool`` is checked before ``int`` because it is a subclass of it.

    Examples
    --------
    >>> classify(True), classify(3), classify("x"), classify([1])
    (<ContextKind.BOOLEAN: 'boolean'>, <ContextKind.INTEGER: 'integer'>, <ContextKind.STRING: 'string'>, <ContextKind.SEQUENCE: 'sequence'>)
    """

    if value is None:
        return ContextKind.NULL
    if isinstance(value, str):
        return ContextKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return ContextKind.BYTES
    if isinstance(value, bool):
        return ContextKind.BOOLEAN
    if isinstance(value, int):
        return ContextKind.INTEGER
    if isinstance(value, float):
        return ContextKind.FLOAT
    if isinstance(value, Mapping):
        return ContextKind.MAPPING
    if isinstance(value, (Sequence, set, frozenset)):
        return ContextKind.SEQUENCE
    return ContextKind.OPAQUE


def to_jsonable(value: Any) -> Any:
    """Convert ``value`` into data :func:`json.dumps` accepts.

    Opaque values fall back to ``str(value)``; mapping keys are stringified.
    """

    kind = classify(value)
    if kind is ContextKind.BYTES:
        return bytes(value).decode("utf-8", errors="replace")
    if kind is ContextKind.MAPPING:
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if kind is ContextKind.SEQUENCE:
        return [to_jsonable(item) for item in value]
    if kind is ContextKind.OPAQUE:
        return str(value)
    return value


def merge_context(*layers: Context | None) -> dict[str, Any]:
    """Return a new dict with ``layers`` applied in order; later keys win."""

    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def drop_keys(context: Context, keys: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``context`` without ``keys``."""

    removed = set(keys)
    return {key: value for key, value in context.items() if key not in removed}


def freeze_context(context: Context | None) -> Mapping[str, Any]:
    """Return a read-only snapshot of ``context``."""

    return MappingProxyType(dict(context or {}))


__all__ = [
    "Context",
    "ContextKind",
    "classify",
    "drop_keys",
    "freeze_context",
    "merge_context",
    "to_jsonable",
]
