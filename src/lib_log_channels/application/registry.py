"""Driver registry mapping driver kinds to factories.

Purpose
-------
Resolve the ``driver`` name found in a :class:`~lib_log_channels.config.ChannelConfig`
to the factory that builds the matching :class:`DriverPort`.

System Role
-----------
Owned by a :class:`~lib_log_channels.manager.LogManager`; there is no
module-level registration state, so two managers never see each other's
custom drivers. The adapters layer provides a pre-seeded instance through
:func:`lib_log_channels.adapters.default_registry`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from threading import RLock

from .ports.driver import DriverFactory


def _normalise(kind: str) -> str:
    return kind.strip().lower()


class DriverRegistry:
    """Map of driver-kind name to factory; the last registration wins.

    Examples
    --------
    >>> registry = DriverRegistry()
    >>> registry.register("null", lambda config: None)
    >>> "NULL" in registry, registry.lookup("missing") is None
    (True, True)
    """

    def __init__(self, factories: Mapping[str, DriverFactory] | None = None) -> None:
        self._lock = RLock()
        self._factories: dict[str, DriverFactory] = {}
        for kind, factory in (factories or {}).items():
            self.register(kind, factory)

    def register(self, kind: str, factory: DriverFactory) -> None:
        """Bind ``kind`` to ``factory``, replacing any earlier binding."""

        if not callable(factory):
            raise TypeError(f"driver factory for [{kind}] must be callable")
        with self._lock:
            self._factories[_normalise(kind)] = factory

    def lookup(self, kind: str) -> DriverFactory | None:
        """Return the factory for ``kind`` or ``None`` when unknown."""

        return self._factories.get(_normalise(kind))

    def kinds(self) -> tuple[str, ...]:
        """Return the registered kinds in sorted order."""

        return tuple(sorted(self._factories))

    def copy(self) -> "DriverRegistry":
        """Return an independent registry with the same bindings."""

        with self._lock:
            return DriverRegistry(dict(self._factories))

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and _normalise(kind) in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.kinds())

    def __len__(self) -> int:
        return len(self._factories)


__all__ = ["DriverRegistry"]
