"""Rich-powered console driver.

Purpose
-------
Print a one-line summary of every accepted entry to a terminal, coloured by
level, for local development and the CLI demo.

System Role
-----------
Registered as the ``console`` driver kind. Colour follows the level's ANSI
colour unless disabled through :class:`~lib_log_channels.config.ConsoleConfig`.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.text import Text

from lib_log_channels.config import ChannelConfig, ConsoleConfig
from lib_log_channels.domain.events import LogEntry
from lib_log_channels.domain.levels import ANSI_RESET
from lib_log_channels.domain.results import DeliveryResult
from lib_log_channels.errors import DriverConfigurationError

from .._formatting import format_console_line


class ConsoleDriver:
    """Render entries through a :class:`rich.console.Console`."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        stream: str = "stderr",
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        if console is not None:
            self._console = console
        else:
            if stream not in ("stderr", "stdout"):
                raise DriverConfigurationError(f"console stream must be 'stderr' or 'stdout', got {stream!r}")
            target = sys.stderr if stream == "stderr" else sys.stdout
            self._console = Console(file=target, force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color

    @property
    def name(self) -> str:
        return "console"

    def log(self, entry: LogEntry) -> DeliveryResult:
        """Print ``entry``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> from lib_log_channels.domain.levels import Level
        >>> console = Console(file=StringIO(), record=True)
        >>> driver = ConsoleDriver(console=console)
        >>> entry = LogEntry("started", Level.NOTICE, datetime(2025, 1, 1, tzinfo=timezone.utc), channel="app")
        >>> driver.log(entry).ok, "started" in console.export_text()
        (True, True)
        """

        line = format_console_line(entry)
        if self._no_color:
            text = Text(line)
        else:
            text = Text.from_ansi(f"{entry.level.ansi_color}{line}{ANSI_RESET}")
        try:
            self._console.print(text, highlight=False, soft_wrap=True)
        except (OSError, ValueError) as exc:
            return DeliveryResult.failure(self.name, f"console write failed: {exc}", exc)
        return DeliveryResult.success(self.name)

    def close(self) -> DeliveryResult:
        return DeliveryResult.success(self.name)


def create_console_driver(config: ChannelConfig) -> ConsoleDriver:
    """Registry factory for the ``console`` kind."""

    settings = config.console or ConsoleConfig()
    return ConsoleDriver(stream=settings.stream, force_color=settings.force_color, no_color=settings.no_color)


__all__ = ["ConsoleDriver", "create_console_driver"]
