from __future__ import annotations

import pytest

import lib_log_channels as log
from lib_log_channels.config import ChannelConfig, LoggingConfig, file_channel
from lib_log_channels.application.registry import DriverRegistry
from lib_log_channels.errors import NotInitialisedError

pytestmark = pytest.mark.usefixtures("reset_runtime")


def _memory_manager_options(recording_driver):
    driver = recording_driver()
    registry = DriverRegistry({"memory": lambda config: driver})
    config = LoggingConfig(default="app", channels={"app": ChannelConfig(driver="memory", level="debug")})
    return driver, config, registry


def test_accessors_raise_when_uninitialised() -> None:
    assert not log.is_initialised()
    with pytest.raises(NotInitialisedError):
        log.get_manager()
    with pytest.raises(NotInitialisedError):
        log.channel("app")
    with pytest.raises(NotInitialisedError):
        log.default()


def test_level_functions_and_share_context_are_noops_when_uninitialised() -> None:
    log.share_context(app="ignored")
    log.info("nobody listens")
    log.error_with_exception("nobody listens", RuntimeError("x"))
    try:
        raise KeyError("x")
    except KeyError:
        log.exception("nobody listens")

    assert log.shutdown().ok


def test_init_twice_requires_shutdown(recording_driver, clock) -> None:
    _, config, registry = _memory_manager_options(recording_driver)
    log.init(config, registry=registry, clock=clock)

    with pytest.raises(RuntimeError, match="cannot be called twice"):
        log.init(config, registry=registry, clock=clock)

    log.shutdown()
    log.init(config, registry=registry, clock=clock)
    assert log.is_initialised()


def test_module_level_emitters_forward_to_default_channel(recording_driver, clock) -> None:
    driver, config, registry = _memory_manager_options(recording_driver)
    log.init(config, registry=registry, clock=clock)

    log.share_context(release="2.0")
    log.debug("d")
    log.info("i", {"user_id": 1})
    log.notice("n")
    log.warning("w")
    log.error("e")
    log.critical("c")
    log.alert("a")
    log.emergency("em")
    log.log("warn", "generic")
    log.critical_with_exception("ce", ValueError("bad"))
    log.alert_with_exception("ae", ValueError("bad"))
    log.emergency_with_exception("ee", ValueError("bad"))

    assert [entry.message for entry in driver.entries] == [
        "d", "i", "n", "w", "e", "c", "a", "em", "generic", "ce", "ae", "ee",
    ]
    assert driver.entries[1].context == {"release": "2.0", "user_id": 1}
    assert driver.entries[-1].exception is not None


def test_channel_and_default_return_loggers(recording_driver, clock) -> None:
    _, config, registry = _memory_manager_options(recording_driver)
    manager = log.init(config, registry=registry, clock=clock)

    assert log.get_manager() is manager
    assert log.channel("app").channel_name == "app"
    assert log.default().channel_name == "app"


def test_level_functions_stay_silent_when_default_channel_is_broken(clock) -> None:
    log.init(LoggingConfig(default="missing"), clock=clock)

    log.info("swallowed")


def test_shutdown_closes_and_clears(recording_driver, clock) -> None:
    driver, config, registry = _memory_manager_options(recording_driver)
    log.init(config, registry=registry, clock=clock)
    log.info("built")

    result = log.shutdown()

    assert result.ok
    assert driver.close_calls == 1
    assert not log.is_initialised()


def test_set_manager_installs_external_manager(tmp_path, clock) -> None:
    manager = log.LogManager(LoggingConfig(default="f", channels={"f": file_channel(str(tmp_path / "f.log"))}), clock=clock)

    log.set_manager(manager)
    log.info("through external manager")
    log.shutdown()

    assert "f.INFO: through external manager" in (tmp_path / "f.log").read_text(encoding="utf-8")
