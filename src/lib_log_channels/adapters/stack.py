"""Fan-out driver delivering each entry to several member drivers."""

from __future__ import annotations

from collections.abc import Sequence

from lib_log_channels.application.ports.driver import DriverPort
from lib_log_channels.application.use_cases.shutdown import close_drivers
from lib_log_channels.domain.events import LogEntry
from lib_log_channels.domain.results import DeliveryResult


class StackDriver:
    """Call every member in order on the calling thread.

    With ``ignore_exceptions`` member failures are dropped and :meth:`log`
    always succeeds; otherwise the last failing member determines the result
    and every failure is listed in :attr:`DeliveryResult.failures`. Closing is
    last-failure-wins regardless of the flag.
    """

    def __init__(self, members: Sequence[DriverPort], *, ignore_exceptions: bool = False) -> None:
        self._members = tuple(members)
        self._ignore_exceptions = ignore_exceptions

    @property
    def name(self) -> str:
        return "stack"

    @property
    def members(self) -> tuple[DriverPort, ...]:
        return self._members

    @property
    def ignore_exceptions(self) -> bool:
        return self._ignore_exceptions

    def log(self, entry: LogEntry) -> DeliveryResult:
        results = []
        for member in self._members:
            try:
                results.append(member.log(entry))
            except Exception as exc:  # noqa: BLE001
                results.append(DeliveryResult.failure(getattr(member, "name", "unknown"), str(exc), exc))
        if self._ignore_exceptions:
            return DeliveryResult.success(self.name)
        return DeliveryResult.aggregate(self.name, results)

    def close(self) -> DeliveryResult:
        return close_drivers(self._members, name=self.name)

    def __repr__(self) -> str:
        return f"StackDriver(members={[member.name for member in self._members]}, ignore_exceptions={self._ignore_exceptions})"


__all__ = ["StackDriver"]
