"""System clock adapter implementing :class:`ClockPort`."""

from __future__ import annotations

from datetime import datetime

from lib_log_channels.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Return the current local time with its UTC offset attached."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


__all__ = ["SystemClock"]
