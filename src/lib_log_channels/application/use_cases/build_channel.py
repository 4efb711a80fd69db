"""Use case turning channel configuration into live channels.

Purpose
-------
Resolve a channel name against the configured channel table, build its driver
through the :class:`~lib_log_channels.application.registry.DriverRegistry`
and pick its minimum level. Stack channels are assembled from their member
channels' drivers, recursively for nested stacks.

Contents
--------
* :func:`create_channel` – build a :class:`Channel` by name.
* :func:`build_stack_driver` – assemble the fan-out driver of a stack channel.
* :func:`resolve_level` – configured level or the driver kind's default.

System Role
-----------
Called by :class:`~lib_log_channels.manager.LogManager` while holding its lock,
so a channel name is constructed at most once per manager. Every failure is a
:class:`~lib_log_channels.errors.ConfigurationError` subclass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING

from lib_log_channels.domain.levels import Level
from lib_log_channels.errors import (
    ChannelNotFoundError,
    ConfigurationError,
    DriverConfigurationError,
    DriverNotSupportedError,
)

from ..channel import Channel
from ..diagnostics import DiagnosticEmitter, build_diagnostic_emitter
from ..ports.driver import DriverPort
from ..registry import DriverRegistry

if TYPE_CHECKING:
    from lib_log_channels.config import ChannelConfig

LOGGER = logging.getLogger(__name__)

StackFactory = Callable[..., DriverPort]

STACK_KIND = "stack"

_DEFAULT_LEVELS: Mapping[str, Level] = {
    "file": Level.DEBUG,
    "console": Level.DEBUG,
    STACK_KIND: Level.DEBUG,
    "webhook": Level.ERROR,
    "slack": Level.ERROR,
}


def _kind(config: "ChannelConfig") -> str:
    return config.driver.strip().lower()


def resolve_level(config: "ChannelConfig") -> Level:
    """Return the configured minimum level or the default of the driver kind.

    Examples
    --------
    >>> from lib_log_channels.config import ChannelConfig
    >>> resolve_level(ChannelConfig(driver="webhook")).name
    'ERROR'
    >>> resolve_level(ChannelConfig(driver="custom")).name
    'INFO'
    >>> resolve_level(ChannelConfig(driver="file", level="warn")).name
    'WARNING'
    """

    if config.level:
        return Level.parse(config.level)
    return _DEFAULT_LEVELS.get(_kind(config), Level.parse(""))


def _default_stack_factory() -> StackFactory:
    from lib_log_channels.adapters.stack import StackDriver

    return StackDriver


def _close_quietly(drivers: Sequence[DriverPort]) -> None:
    for driver in drivers:
        try:
            driver.close()
        except Exception:  # noqa: BLE001
            LOGGER.debug("closing partially built driver %r failed", driver, exc_info=True)


def _build_driver(
    name: str,
    config: "ChannelConfig",
    channels_config: Mapping[str, "ChannelConfig"],
    registry: DriverRegistry,
    stack_factory: StackFactory | None,
    emit: DiagnosticEmitter,
    chain: tuple[str, ...],
) -> DriverPort:
    kind = _kind(config)
    if kind == STACK_KIND:
        return build_stack_driver(
            name,
            config,
            channels_config,
            registry,
            stack_factory=stack_factory,
            diagnostic=emit,
            _chain=chain,
        )
    factory = registry.lookup(kind)
    if factory is None:
        raise DriverNotSupportedError(config.driver)
    try:
        return factory(config)
    except DriverConfigurationError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise DriverConfigurationError(f"failed to create driver [{kind}] for channel [{name}]: {exc}") from exc


def build_stack_driver(
    name: str,
    config: "ChannelConfig",
    channels_config: Mapping[str, "ChannelConfig"],
    registry: DriverRegistry,
    *,
    stack_factory: StackFactory | None = None,
    diagnostic: DiagnosticEmitter | None = None,
    _chain: tuple[str, ...] = (),
) -> DriverPort:
    """Build the fan-out driver of stack channel ``name``.

    Members are resolved in configured order. With ``ignore_exceptions`` a
    member that cannot be built is skipped (and reported to the diagnostic
    hook); otherwise its error aborts construction. A stack that ends up
    without members is rejected in both modes, and so is a stack that refers
    back to itself.
    """

    stack = config.stack
    if stack is None or not stack.channels:
        raise DriverConfigurationError(f"stack channel [{name}] requires channel list")
    emit = diagnostic or build_diagnostic_emitter(None)
    factory = stack_factory or _default_stack_factory()
    chain = (*_chain, name)

    members: list[DriverPort] = []
    for member in stack.channels:
        if member in chain:
            _close_quietly(members)
            raise DriverConfigurationError(f"stack channel [{name}] refers back to [{member}]")
        try:
            member_config = channels_config.get(member)
            if member_config is None:
                raise ChannelNotFoundError(member)
            members.append(_build_driver(member, member_config, channels_config, registry, stack_factory, emit, chain))
        except ConfigurationError as exc:
            if not stack.ignore_exceptions:
                _close_quietly(members)
                raise
            LOGGER.debug("stack channel %s skips member %s: %s", name, member, exc)
            emit("stack_member_skipped", {"stack": name, "member": member, "reason": str(exc)})

    if not members:
        raise DriverConfigurationError(f"stack channel [{name}] has no usable member channels")
    return factory(members, ignore_exceptions=stack.ignore_exceptions)


def create_channel(
    name: str,
    channels_config: Mapping[str, "ChannelConfig"],
    registry: DriverRegistry,
    *,
    stack_factory: StackFactory | None = None,
    diagnostic: DiagnosticEmitter | None = None,
) -> Channel:
    """Build the channel called ``name``.

    Raises
    ------
    ChannelNotFoundError
        ``name`` is not configured.
    DriverNotSupportedError
        No factory is registered for the channel's driver kind.
    DriverConfigurationError
        The driver could not be built; the cause is chained.
    """

    config = channels_config.get(name)
    if config is None:
        raise ChannelNotFoundError(name)
    emit = diagnostic or build_diagnostic_emitter(None)
    driver = _build_driver(name, config, channels_config, registry, stack_factory, emit, ())
    channel = Channel(name=name, driver=driver, min_level=resolve_level(config))
    emit("channel_created", {"channel": name, "driver": driver.name, "min_level": channel.min_level.name})
    return channel


__all__ = ["STACK_KIND", "build_stack_driver", "create_channel", "resolve_level"]
