"""Log entry value objects.

Purpose
-------
Provide the immutable record of one log event travelling from a
:class:`~lib_log_channels.application.logger.ChannelLogger` into a driver,
plus the structured description of an attached exception.

Contents
--------
* :class:`ExceptionInfo` – class, message, optional code and location, trace.
* :class:`LogEntry` – message, level, timestamp, context, exception, channel.
* ``_ensure_aware`` – timestamp validation.

System Role
-----------
Domain layer. Drivers receive :class:`LogEntry` instances and may read them
from several threads at once (stack fan-out), hence the frozen dataclasses
and read-only context snapshots.
"""

from __future__ import annotations

import json
import os
import traceback
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .context import freeze_context, to_jsonable
from .levels import Level

MAX_TRACE_FRAMES = 20

_LIBRARY_ROOT = str(Path(__file__).resolve().parents[1]) + os.sep


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` carries timezone information."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts


def _is_library_frame(filename: str) -> bool:
    return os.path.abspath(filename).startswith(_LIBRARY_ROOT)


def _describe(frame: traceback.FrameSummary) -> str:
    return f"{frame.filename}:{frame.lineno} ({frame.name})"


def _class_name(exc: BaseException) -> str:
    kind = type(exc)
    if kind.__module__ == "builtins":
        return kind.__qualname__
    return f"{kind.__module__}.{kind.__qualname__}"


def _error_code(exc: BaseException) -> int | None:
    for attribute in ("errno", "code"):
        value = getattr(exc, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def capture_trace(frames: Iterable[traceback.FrameSummary], *, limit: int = MAX_TRACE_FRAMES) -> tuple[str, ...]:
    """Describe ``frames`` most recent first, skipping this library's frames."""

    described = [_describe(frame) for frame in reversed(list(frames)) if not _is_library_frame(frame.filename)]
    return tuple(described[:limit])


def find_call_site() -> tuple[str | None, int | None]:
    """Return file and line of the innermost frame outside this library."""

    for frame in reversed(traceback.extract_stack()):
        if not _is_library_frame(frame.filename):
            return frame.filename, frame.lineno
    return None, None


@dataclass(slots=True, frozen=True)
class ExceptionInfo:
    """Structured description of a failure attached to a log entry.

    Attributes
    ----------
    class_name:
        Category tag of the failure (qualified exception type name).
    message:
        Text of the failure.
    code:
        Optional numeric code (``errno`` or ``code`` attribute).
    file, line:
        Call site that logged the failure.
    trace:
        Frame descriptors ``"path:line (function)"``, most recent first,
        capped at :data:`MAX_TRACE_FRAMES`.
    """

    class_name: str
    message: str
    code: int | None = None
    file: str | None = None
    line: int | None = None
    trace: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "trace", tuple(self.trace)[:MAX_TRACE_FRAMES])

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionInfo":
        """Describe ``exc`` including its traceback and the logging call site.

        The exception's own traceback is used when it was raised; otherwise the
        current call stack stands in for it.
        """

        if exc.__traceback__ is not None:
            frames = traceback.extract_tb(exc.__traceback__)
        else:
            frames = traceback.extract_stack()
        file, line = find_call_site()
        return cls(
            class_name=_class_name(exc),
            message=str(exc),
            code=_error_code(exc),
            file=file,
            line=line,
            trace=capture_trace(frames),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict, omitting empty optional fields."""

        data = asdict(self)
        data["class"] = data.pop("class_name")
        data["trace"] = list(self.trace)
        return {key: value for key, value in data.items() if value not in (None, [])}


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable record of one emitted log event.

    Attributes
    ----------
    message:
        Rendered message passed by the caller.
    level:
        Severity of the entry.
    timestamp:
        Timezone-aware creation time.
    context:
        Read-only snapshot of the merged context layers.
    exception:
        Optional :class:`ExceptionInfo`.
    channel:
        Name of the originating channel (empty when built by hand).
    """

    message: str
    level: Level
    timestamp: datetime
    context: Mapping[str, Any] = field(default_factory=dict)
    exception: ExceptionInfo | None = None
    channel: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "context", freeze_context(self.context))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a JSON-compatible dictionary."""

        data: dict[str, Any] = {
            "message": self.message,
            "level": self.level.name,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.context:
            data["context"] = to_jsonable(self.context)
        if self.exception is not None:
            data["exception"] = self.exception.to_dict()
        if self.channel:
            data["channel"] = self.channel
        return data

    def to_json(self) -> str:
        """Serialize the entry to indented JSON."""

        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def context_json(self) -> str:
        """Return the context as pretty-printed JSON, or ``""`` when empty."""

        if not self.context:
            return ""
        return json.dumps(to_jsonable(self.context), indent=4, ensure_ascii=False)

    def exception_json(self) -> str:
        """Return the exception as pretty-printed JSON, or ``""`` when absent."""

        if self.exception is None:
            return ""
        return json.dumps(self.exception.to_dict(), indent=4, ensure_ascii=False)


__all__ = ["MAX_TRACE_FRAMES", "ExceptionInfo", "LogEntry", "capture_trace", "find_call_site"]
