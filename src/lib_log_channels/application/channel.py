"""Runtime channel entity pairing a driver with its filtering policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from lib_log_channels.domain.levels import Level

from .ports.driver import DriverPort


@dataclass(slots=True, eq=False)
class Channel:
    """A named, configured destination owned by one manager.

    Attributes
    ----------
    name:
        Channel name from the configuration.
    driver:
        Backend receiving accepted entries; never replaced after construction.
    min_level:
        Entries strictly below this level are dropped.
    context:
        Channel-private context. Shared-context updates from the manager are
        patched into it in place.
    """

    name: str
    driver: DriverPort
    min_level: Level = Level.DEBUG
    context: dict[str, Any] = field(default_factory=dict)

    def accepts(self, level: Level) -> bool:
        """Return ``True`` when ``level`` passes the channel's minimum.

        Examples
        --------
        >>> channel = Channel("audit", driver=None, min_level=Level.WARNING)
        >>> channel.accepts(Level.ERROR), channel.accepts(Level.INFO)
        (True, False)
        """

        return level >= self.min_level


__all__ = ["Channel"]
