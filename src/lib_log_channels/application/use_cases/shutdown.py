"""Teardown of every driver a manager has built."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from lib_log_channels.domain.results import DeliveryResult

from ..ports.driver import DriverPort

LOGGER = logging.getLogger(__name__)


def close_drivers(drivers: Iterable[DriverPort], *, name: str = "manager") -> DeliveryResult:
    """Close ``drivers`` in order; the last failure wins, all failures are kept.

    Examples
    --------
    >>> class _Broken:
    ...     name = "broken"
    ...     def close(self):
    ...         return DeliveryResult.failure(self.name, "already gone")
    >>> result = close_drivers([_Broken()])
    >>> result.ok, result.reason
    (False, 'already gone')
    """

    results: list[DeliveryResult] = []
    for driver in drivers:
        try:
            results.append(driver.close())
        except Exception as exc:  # noqa: BLE001
            results.append(DeliveryResult.failure(getattr(driver, "name", "unknown"), str(exc), exc))
    outcome = DeliveryResult.aggregate(name, results)
    if not outcome.ok:
        LOGGER.debug("closing drivers reported %d failure(s); last: %s", len(outcome.failures), outcome.reason)
    return outcome


__all__ = ["close_drivers"]
