"""Diagnostic hook plumbing.

Hosts may pass a callable ``hook(event_name, payload)`` to observe channel
construction, skipped stack members, delivery failures and teardown. The hook
must never break logging, so its exceptions are logged and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, Mapping[str, Any]], None] | None
DiagnosticEmitter = Callable[[str, Mapping[str, Any]], None]


def build_diagnostic_emitter(hook: DiagnosticHook) -> DiagnosticEmitter:
    """Wrap ``hook`` so failures inside it are contained.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append((name, dict(payload))))
    >>> emit("closed", {"ok": True})
    >>> seen
    [('closed', {'ok': True})]
    >>> build_diagnostic_emitter(None)("closed", {})
    """

    def emit(event_name: str, payload: Mapping[str, Any]) -> None:
        if hook is None:
            return
        try:
            hook(event_name, payload)
        except Exception:  # noqa: BLE001
            LOGGER.debug("diagnostic hook failed for %s", event_name, exc_info=True)

    return emit


__all__ = ["DiagnosticEmitter", "DiagnosticHook", "build_diagnostic_emitter"]
