"""Delivery outcomes returned by drivers.

Drivers never raise across their boundary; every ``log``/``close`` call
returns a :class:`DeliveryResult` instead. Aggregation over several results
(stack fan-out, manager teardown) follows a last-failure-wins policy while
still recording every failure in :attr:`DeliveryResult.failures`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class DeliveryResult:
    """Outcome of a driver operation.

    Attributes
    ----------
    ok:
        ``True`` when the driver accepted the call.
    driver:
        Name of the driver reporting the outcome.
    reason:
        Short failure description; ``None`` on success.
    error:
        Captured exception behind the failure, if any. Never raised.
    failures:
        Every individual failure folded into an aggregate result.
    """

    ok: bool
    driver: str
    reason: str | None = None
    error: BaseException | None = None
    failures: tuple["DeliveryResult", ...] = ()

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, driver: str) -> "DeliveryResult":
        return cls(ok=True, driver=driver)

    @classmethod
    def failure(cls, driver: str, reason: str, error: BaseException | None = None) -> "DeliveryResult":
        return cls(ok=False, driver=driver, reason=reason, error=error)

    @classmethod
    def aggregate(cls, driver: str, results: Iterable["DeliveryResult"]) -> "DeliveryResult":
        """Fold ``results`` into one outcome; the last failure wins.

        Examples
        --------
        >>> first = DeliveryResult.failure("file", "disk full")
        >>> second = DeliveryResult.failure("webhook", "status 500")
        >>> merged = DeliveryResult.aggregate("stack", [first, DeliveryResult.success("file"), second])
        >>> merged.ok, merged.reason, len(merged.failures)
        (False, 'status 500', 2)
        """

        failures: list[DeliveryResult] = []
        for result in results:
            if not result.ok:
                failures.extend(result.failures or (result,))
        if not failures:
            return cls.success(driver)
        last = failures[-1]
        return cls(ok=False, driver=driver, reason=last.reason, error=last.error, failures=tuple(failures))


__all__ = ["DeliveryResult"]
