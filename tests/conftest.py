from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from datetime import datetime, timezone
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from lib_log_channels import runtime
from lib_log_channels.domain.events import ExceptionInfo, LogEntry
from lib_log_channels.domain.levels import Level
from lib_log_channels.domain.results import DeliveryResult

FIXED_NOW = datetime(2025, 9, 30, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


class RecordingDriver:
    """In-memory driver recording entries; optionally fails on log or close."""

    def __init__(self, name: str = "memory", *, fail_reason: str | None = None, close_reason: str | None = None) -> None:
        self._name = name
        self.fail_reason = fail_reason
        self.close_reason = close_reason
        self.entries: list[LogEntry] = []
        self.close_calls = 0

    @property
    def name(self) -> str:
        return self._name

    def log(self, entry: LogEntry) -> DeliveryResult:
        self.entries.append(entry)
        if self.fail_reason is not None:
            return DeliveryResult.failure(self._name, self.fail_reason)
        return DeliveryResult.success(self._name)

    def close(self) -> DeliveryResult:
        self.close_calls += 1
        if self.close_reason is not None:
            return DeliveryResult.failure(self._name, self.close_reason)
        return DeliveryResult.success(self._name)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def recording_driver() -> type[RecordingDriver]:
    return RecordingDriver


@pytest.fixture
def make_entry() -> Callable[..., LogEntry]:
    def _make(
        message: str = "hello",
        level: Level = Level.INFO,
        context: Mapping[str, Any] | None = None,
        exception: ExceptionInfo | None = None,
        channel: str = "app",
    ) -> LogEntry:
        return LogEntry(message, level, FIXED_NOW, context or {}, exception, channel)

    return _make


@pytest.fixture
def reset_runtime() -> Iterator[None]:
    runtime.shutdown()
    try:
        yield
    finally:
        runtime.shutdown()
