from __future__ import annotations

import json
from decimal import Decimal

import pytest

from lib_log_channels.adapters._formatting import (
    FILE_TRACE_LIMIT,
    format_console_line,
    format_file_record,
    render_text_value,
    render_webhook_value,
    title_case_key,
)
from lib_log_channels.domain.events import ExceptionInfo
from lib_log_channels.domain.levels import Level


@pytest.mark.parametrize(
    "key, expected",
    [
        ("user_id", "User_Id"),
        ("name", "Name"),
        ("already_Upper", "Already_Upper"),
        ("_private", "_Private"),
        ("trailing_", "Trailing_"),
        ("camelCase", "CamelCase"),
        ("9lives", "9lives"),
    ],
)
def test_title_case_key(key: str, expected: str) -> None:
    assert title_case_key(key) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("text", "text"),
        (b"bytes", "bytes"),
        (None, "null"),
        (True, "true"),
        (12, "12"),
        (1.25, "1.25"),
        ([1, "a"], '[1, "a"]'),
        (Decimal("3.10"), "3.10"),
    ],
)
def test_render_text_value(value: object, expected: str) -> None:
    assert render_text_value(value) == expected


def test_render_webhook_value_fences_structured_data() -> None:
    rendered = render_webhook_value({"items": [1, 2]})

    assert rendered.startswith("```\n")
    assert rendered.endswith("\n```")
    assert json.loads(rendered[4:-4]) == {"items": [1, 2]}


def test_render_webhook_value_falls_back_to_str_for_unserialisable_objects() -> None:
    class Token:
        def __str__(self) -> str:
            return "token-123"

    assert render_webhook_value(Token()) == "token-123"
    assert render_webhook_value(False) == "false"


def test_file_record_contains_header_title_cased_keys_and_blank_line(make_entry) -> None:
    entry = make_entry("Order shipped", Level.NOTICE, {"order_id": 42, "carrier_name": "DHL"}, channel="shop")

    record = format_file_record(entry)

    assert record.startswith("[2025-09-30 12:00:00] shop.NOTICE: Order shipped\n")
    assert "  Order_Id: 42\n" in record
    assert "  Carrier_Name: DHL\n" in record
    assert record.endswith("\n\n")


def test_file_record_uses_local_when_channel_is_empty(make_entry) -> None:
    record = format_file_record(make_entry(channel=""), "%d.%m.%Y")

    assert record.startswith("[30.09.2025] local.INFO: hello")


def test_file_record_exception_block_truncates_trace(make_entry) -> None:
    trace = tuple(f"app.py:{line} (handler)" for line in range(15))
    info = ExceptionInfo("ValueError", "bad", code=7, file="app.py", line=3, trace=trace)

    record = format_file_record(make_entry(exception=info))
    lines = record.splitlines()

    assert "  Exception:" in lines
    assert "    Class: ValueError" in lines
    assert "    Message: bad" in lines
    assert "    Code: 7" in lines
    assert "    File: app.py:3" in lines
    frames = [line for line in lines if line.startswith("      #")]
    assert len(frames) == FILE_TRACE_LIMIT
    assert lines[-1] == f"      ... and {len(trace) - FILE_TRACE_LIMIT} more"


def test_file_record_exception_without_optional_parts(make_entry) -> None:
    record = format_file_record(make_entry(exception=ExceptionInfo("KeyError", "'x'")))

    assert "Code:" not in record
    assert "File:" not in record
    assert "Trace:" not in record
    assert "more" not in record


def test_console_line_lists_sorted_context_and_exception(make_entry) -> None:
    entry = make_entry("ready", Level.ERROR, {"b": 2, "a": 1}, ExceptionInfo("OSError", "disk"), channel="web")

    line = format_console_line(entry)

    assert "ERROR" in line
    assert line.index("a=1") < line.index("b=2")
    assert line.endswith("[OSError: disk]")
