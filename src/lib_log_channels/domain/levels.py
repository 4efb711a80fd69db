"""Severity scale shared by every channel and driver.

Purpose
-------
Offer an ordered, eight-step severity enum (syslog style) together with the
presentation metadata the drivers need: display names, glyphs, terminal colours
and webhook attachment colours.

Contents
--------
* :class:`Level` enum with parsing helpers and presentation metadata.
* ``_ICON_TABLE`` / ``_ANSI_TABLE`` / ``_WEBHOOK_COLOR_TABLE`` lookup tables.

System Role
-----------
Channels filter on :class:`Level` ordering; the file, console and webhook
adapters render the metadata exposed here.
"""

from __future__ import annotations

from enum import Enum


class Level(Enum):
    """Totally ordered severity levels, ascending from ``DEBUG`` to ``EMERGENCY``."""

    DEBUG = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    ALERT = 6
    EMERGENCY = 7

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.value >= other.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the emoji glyph used in webhook titles and console lines."""

        return _ICON_TABLE[self]

    @property
    def ansi_color(self) -> str:
        """Return the ANSI escape sequence colouring this level on terminals."""

        return _ANSI_TABLE[self]

    @property
    def webhook_color(self) -> str:
        """Return the hex colour of webhook attachments for this level."""

        return _WEBHOOK_COLOR_TABLE[self]

    @classmethod
    def parse(cls, text: str | None) -> "Level":
        """Translate ``text`` into a level, falling back to :attr:`INFO`.

        Matching ignores case and surrounding whitespace and accepts the usual
        short aliases. Unknown input is never an error.

        Examples
        --------
        >>> Level.parse(" warn ")
        <Level.WARNING: 3>
        >>> Level.parse("verbose")
        <Level.INFO: 1>
        """

        normalized = (text or "").strip().upper()
        return _ALIASES.get(normalized, cls.INFO)

    @classmethod
    def coerce(cls, level: "Level | str | None") -> "Level":
        """Return ``level`` unchanged or parse it when given as text."""

        if isinstance(level, Level):
            return level
        return cls.parse(level)


ANSI_RESET = "\033[0m"

_ICON_TABLE = {
    Level.DEBUG: "🔍",
    Level.INFO: "ℹ️",
    Level.NOTICE: "📝",
    Level.WARNING: "⚠️",
    Level.ERROR: "❌",
    Level.CRITICAL: "🔥",
    Level.ALERT: "🚨",
    Level.EMERGENCY: "💀",
}

_ANSI_TABLE = {
    Level.DEBUG: "\033[36m",
    Level.INFO: "\033[32m",
    Level.NOTICE: "\033[34m",
    Level.WARNING: "\033[33m",
    Level.ERROR: "\033[31m",
    Level.CRITICAL: "\033[35m",
    Level.ALERT: "\033[31;1m",
    Level.EMERGENCY: "\033[37;41m",
}

_WEBHOOK_COLOR_TABLE = {
    Level.DEBUG: "#36a64f",
    Level.INFO: "#2196F3",
    Level.NOTICE: "#9C27B0",
    Level.WARNING: "#FF9800",
    Level.ERROR: "#f44336",
    Level.CRITICAL: "#D32F2F",
    Level.ALERT: "#B71C1C",
    Level.EMERGENCY: "#000000",
}

_ALIASES = {
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "NOTICE": Level.NOTICE,
    "WARNING": Level.WARNING,
    "WARN": Level.WARNING,
    "ERROR": Level.ERROR,
    "ERR": Level.ERROR,
    "CRITICAL": Level.CRITICAL,
    "CRIT": Level.CRITICAL,
    "ALERT": Level.ALERT,
    "EMERGENCY": Level.EMERGENCY,
    "EMERG": Level.EMERGENCY,
}


__all__ = ["ANSI_RESET", "Level"]
