from __future__ import annotations

import pytest

from lib_log_channels.adapters import StackDriver, default_registry
from lib_log_channels.application.diagnostics import build_diagnostic_emitter
from lib_log_channels.application.registry import DriverRegistry
from lib_log_channels.application.use_cases.build_channel import build_stack_driver, create_channel, resolve_level
from lib_log_channels.application.use_cases.shutdown import close_drivers
from lib_log_channels.config import ChannelConfig, file_channel, stack_channel
from lib_log_channels.domain.levels import Level
from lib_log_channels.errors import (
    ChannelNotFoundError,
    DriverConfigurationError,
    DriverNotSupportedError,
)


@pytest.fixture
def registry(recording_driver) -> DriverRegistry:
    registry = DriverRegistry()
    registry.register("memory", lambda config: recording_driver(config.options.get("name", "memory")))

    def broken(config):
        raise OSError("cannot connect")

    registry.register("broken", broken)
    return registry


def test_unknown_channel_is_rejected(registry) -> None:
    with pytest.raises(ChannelNotFoundError, match=r"channel \[ghost\] is not defined"):
        create_channel("ghost", {}, registry)


def test_unknown_driver_kind_is_rejected(registry) -> None:
    with pytest.raises(DriverNotSupportedError, match=r"driver \[carrier-pigeon\] is not supported"):
        create_channel("app", {"app": ChannelConfig(driver="carrier-pigeon")}, registry)


def test_factory_failure_is_wrapped_and_chained(registry) -> None:
    with pytest.raises(DriverConfigurationError) as excinfo:
        create_channel("app", {"app": ChannelConfig(driver="broken")}, registry)

    assert isinstance(excinfo.value.__cause__, OSError)


def test_create_channel_uses_registry_factory_and_level(registry) -> None:
    channel = create_channel("app", {"app": ChannelConfig(driver="memory", level="notice")}, registry)

    assert channel.name == "app"
    assert channel.driver.name == "memory"
    assert channel.min_level is Level.NOTICE
    assert channel.context == {}


@pytest.mark.parametrize(
    "driver, level, expected",
    [
        ("file", None, Level.DEBUG),
        ("console", None, Level.DEBUG),
        ("stack", None, Level.DEBUG),
        ("webhook", None, Level.ERROR),
        ("slack", "", Level.ERROR),
        ("memory", None, Level.INFO),
        ("file", "bogus", Level.INFO),
        ("webhook", "debug", Level.DEBUG),
    ],
)
def test_resolve_level_defaults_per_kind(driver: str, level: str | None, expected: Level) -> None:
    assert resolve_level(ChannelConfig(driver=driver, level=level)) is expected


def test_stack_without_members_is_rejected(registry) -> None:
    channels = {"all": stack_channel([])}

    with pytest.raises(DriverConfigurationError, match="requires channel list"):
        create_channel("all", channels, registry)


def test_stack_builds_members_in_order(registry) -> None:
    channels = {
        "a": ChannelConfig(driver="memory", options={"name": "first"}),
        "b": ChannelConfig(driver="memory", options={"name": "second"}),
        "all": stack_channel(["a", "b"]),
    }

    channel = create_channel("all", channels, registry, stack_factory=StackDriver)

    assert [member.name for member in channel.driver.members] == ["first", "second"]
    assert channel.min_level is Level.DEBUG


def test_stack_member_failure_aborts_without_ignore(registry) -> None:
    channels = {"a": ChannelConfig(driver="memory"), "b": ChannelConfig(driver="broken"), "all": stack_channel(["a", "b"])}

    with pytest.raises(DriverConfigurationError):
        create_channel("all", channels, registry)


@pytest.mark.parametrize("missing", ["undefined-member", "unknown-kind", "broken-member"])
def test_stack_skips_unresolvable_members_with_ignore(registry, missing: str) -> None:
    events: list[tuple[str, dict]] = []
    channels = {
        "ok": ChannelConfig(driver="memory"),
        "unknown-kind": ChannelConfig(driver="nope"),
        "broken-member": ChannelConfig(driver="broken"),
        "all": stack_channel([missing, "ok"], ignore_exceptions=True),
    }

    channel = create_channel(
        "all",
        channels,
        registry,
        diagnostic=build_diagnostic_emitter(lambda name, payload: events.append((name, dict(payload)))),
    )

    assert [member.name for member in channel.driver.members] == ["memory"]
    assert ("stack_member_skipped", missing) in [(name, payload.get("member")) for name, payload in events]


@pytest.mark.parametrize("ignore", [True, False])
def test_stack_with_zero_resolvable_members_fails_regardless_of_flag(registry, ignore: bool) -> None:
    channels = {"bad": ChannelConfig(driver="broken"), "all": stack_channel(["bad", "ghost"], ignore_exceptions=ignore)}

    with pytest.raises(DriverConfigurationError):
        create_channel("all", channels, registry)


def test_nested_stacks_are_built_recursively(registry) -> None:
    channels = {
        "a": ChannelConfig(driver="memory"),
        "inner": stack_channel(["a"]),
        "outer": stack_channel(["inner", "a"]),
    }

    channel = create_channel("outer", channels, registry)

    inner, leaf = channel.driver.members
    assert inner.name == "stack"
    assert leaf.name == "memory"


def test_stack_cycle_is_a_configuration_error(registry) -> None:
    channels = {"x": stack_channel(["y"], ignore_exceptions=True), "y": stack_channel(["x"], ignore_exceptions=True)}

    with pytest.raises(DriverConfigurationError):
        create_channel("x", channels, registry)


def test_aborted_stack_closes_members_already_built(recording_driver) -> None:
    built = []
    registry = default_registry()

    def tracking(config):
        driver = recording_driver()
        built.append(driver)
        return driver

    registry.register("memory", tracking)
    channels = {"a": ChannelConfig(driver="memory"), "all": stack_channel(["a", "ghost"])}

    with pytest.raises(ChannelNotFoundError):
        build_stack_driver("all", channels["all"], channels, registry)

    assert built[0].close_calls == 1


def test_file_member_with_unwritable_path_is_skipped(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    channels = {
        "bad": file_channel(str(blocker / "nested" / "app.log")),
        "good": file_channel(str(tmp_path / "good.log")),
        "all": stack_channel(["bad", "good"], ignore_exceptions=True),
    }

    channel = create_channel("all", channels, default_registry())
    try:
        assert [member.name for member in channel.driver.members] == ["file"]
    finally:
        close_drivers([channel.driver])
