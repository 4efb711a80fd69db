"""Rendering helpers shared by the file, webhook and console drivers.

Purpose
-------
Keep the textual presentation of context values and log records in one place
so the drivers agree on how a value looks. Every renderer dispatches on
:class:`~lib_log_channels.domain.context.ContextKind` instead of ad-hoc type
checks.

Contents
--------
* :func:`title_case_key` – ``user_id`` → ``User_Id``.
* :func:`render_text_value` – single-line rendering for files and consoles.
* :func:`render_webhook_value` – chat-friendly rendering with code fences.
* :func:`format_file_record` – the multi-line file record of one entry.
* :func:`format_console_line` – one-line console summary of one entry.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_channels.config import DEFAULT_DATE_FORMAT
from lib_log_channels.domain.context import ContextKind, classify, to_jsonable
from lib_log_channels.domain.events import LogEntry

FILE_TRACE_LIMIT = 11
LOCAL_CHANNEL = "local"


def title_case_key(key: str) -> str:
    """Upper-case the first letter of every underscore-separated segment.

    Examples
    --------
    >>> title_case_key("user_id"), title_case_key("request__path"), title_case_key("")
    ('User_Id', 'Request__Path', '')
    """

    return "_".join(segment[:1].upper() + segment[1:] for segment in key.split("_"))


def render_text_value(value: Any) -> str:
    """Render ``value`` on a single line.

    Examples
    --------
    >>> render_text_value(b"raw"), render_text_value(False), render_text_value({"a": [1, 2]})
    ('raw', 'false', '{"a": [1, 2]}')
    """

    kind = classify(value)
    if kind is ContextKind.STRING:
        return value
    if kind is ContextKind.BYTES:
        return bytes(value).decode("utf-8", errors="replace")
    if kind is ContextKind.NULL:
        return "null"
    if kind is ContextKind.BOOLEAN:
        return "true" if value else "false"
    if kind in (ContextKind.INTEGER, ContextKind.FLOAT):
        return str(value)
    if kind in (ContextKind.MAPPING, ContextKind.SEQUENCE):
        return json.dumps(to_jsonable(value), ensure_ascii=False)
    return str(value)


def _fenced(data: Any) -> str:
    return "```\n" + json.dumps(data, indent=4, ensure_ascii=False) + "\n```"


def render_webhook_value(value: Any) -> str:
    """Render ``value`` for a webhook field; structured data becomes a fenced JSON block.

    Examples
    --------
    >>> render_webhook_value(42), render_webhook_value(True)
    ('42', 'true')
    >>> print(render_webhook_value({"id": 1}))
    ```
    {
        "id": 1
    }
    ```
    """

    kind = classify(value)
    if kind in (ContextKind.MAPPING, ContextKind.SEQUENCE):
        return _fenced(to_jsonable(value))
    if kind is ContextKind.OPAQUE:
        try:
            return _fenced(value)
        except (TypeError, ValueError):
            return str(value)
    return render_text_value(value)


def format_file_record(entry: LogEntry, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Return the file record of ``entry`` terminated by a blank line.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_channels.domain.levels import Level
    >>> entry = LogEntry("Paid", Level.INFO, datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc), {"order_id": 7}, channel="shop")
    >>> print(format_file_record(entry), end="")
    [2025-01-02 03:04:05] shop.INFO: Paid
      Order_Id: 7
    <BLANKLINE>
    """

    channel = entry.channel or LOCAL_CHANNEL
    lines = [f"[{entry.timestamp.strftime(date_format)}] {channel}.{entry.level.name}: {entry.message}"]
    for key, value in entry.context.items():
        lines.append(f"  {title_case_key(key)}: {render_text_value(value)}")

    info = entry.exception
    if info is not None:
        lines.append("")
        lines.append("  Exception:")
        lines.append(f"    Class: {info.class_name}")
        lines.append(f"    Message: {info.message}")
        if info.code is not None:
            lines.append(f"    Code: {info.code}")
        if info.file:
            lines.append(f"    File: {info.file}:{info.line or 0}")
        if info.trace:
            lines.append("    Trace:")
            for index, frame in enumerate(info.trace[:FILE_TRACE_LIMIT]):
                lines.append(f"      #{index} {frame}")
            hidden = len(info.trace) - FILE_TRACE_LIMIT
            if hidden > 0:
                lines.append(f"      ... and {hidden} more")
    return "\n".join(lines) + "\n\n"


def format_console_line(entry: LogEntry) -> str:
    """Return a one-line console summary of ``entry``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_channels.domain.levels import Level
    >>> entry = LogEntry("ready", Level.INFO, datetime(2025, 1, 2, tzinfo=timezone.utc), {"port": 80}, channel="web")
    >>> format_console_line(entry).endswith("web | ready port=80")
    True
    """

    fields = "".join(f" {key}={render_text_value(value)}" for key, value in sorted(entry.context.items()))
    line = f"{entry.timestamp.isoformat()} {entry.level.icon} {entry.level.name:>9} {entry.channel or LOCAL_CHANNEL} | {entry.message}{fields}"
    if entry.exception is not None:
        line += f" [{entry.exception.class_name}: {entry.exception.message}]"
    return line


__all__ = [
    "FILE_TRACE_LIMIT",
    "format_console_line",
    "format_file_record",
    "render_text_value",
    "render_webhook_value",
    "title_case_key",
]
