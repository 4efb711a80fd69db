from __future__ import annotations

from lib_log_channels.domain.results import DeliveryResult


def test_success_is_truthy_and_failure_is_falsy() -> None:
    assert DeliveryResult.success("file")
    assert not DeliveryResult.failure("file", "disk full")


def test_aggregate_without_failures_is_success() -> None:
    result = DeliveryResult.aggregate("stack", [DeliveryResult.success("a"), DeliveryResult.success("b")])

    assert result.ok
    assert result.driver == "stack"
    assert result.failures == ()


def test_aggregate_reports_last_failure_and_keeps_all() -> None:
    error = OSError("gone")
    first = DeliveryResult.failure("a", "first")
    last = DeliveryResult.failure("b", "last", error)

    result = DeliveryResult.aggregate("stack", [first, DeliveryResult.success("c"), last])

    assert not result.ok
    assert result.reason == "last"
    assert result.error is error
    assert result.failures == (first, last)


def test_aggregate_flattens_nested_aggregates() -> None:
    inner = DeliveryResult.aggregate("inner", [DeliveryResult.failure("a", "one"), DeliveryResult.failure("b", "two")])
    outer = DeliveryResult.aggregate("outer", [inner, DeliveryResult.failure("c", "three")])

    assert [failure.reason for failure in outer.failures] == ["one", "two", "three"]
    assert outer.reason == "three"
