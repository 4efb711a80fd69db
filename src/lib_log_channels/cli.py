"""Command line interface built on click and lib_cli_exit_tools.

Purpose
-------
Offer a small operator surface: print package metadata, run a demonstration
of channels and context layering, and fire test messages at a webhook.

Contents
--------
* :data:`cli` – click group with ``info``, ``demo`` and ``send-test``.
* :func:`main` – entry point used by the console script and ``python -m``.

System Role
-----------
Outer shell only; every command goes through the public
:class:`~lib_log_channels.manager.LogManager` or driver APIs.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import click
import httpx
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .adapters import SystemClock, WebhookDriver
from .config import LoggingConfig, console_channel, file_channel, stack_channel
from .domain.events import ExceptionInfo, LogEntry
from .domain.levels import Level
from .domain.results import DeliveryResult
from .errors import DriverConfigurationError
from .manager import LogManager

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DEFAULT_DEMO_LOG = Path("logs/demo.log")


@dataclass(slots=True, frozen=True)
class DemoSummary:
    """What the ``demo`` command emitted."""

    channel: str
    emitted: int
    close_result: DeliveryResult


def _demo_config(log_path: Path) -> LoggingConfig:
    return LoggingConfig(
        default="demo",
        app_name="lib_log_channels demo",
        channels={
            "file": file_channel(str(log_path)),
            "console": console_channel(stream="stdout"),
            "demo": stack_channel(["file", "console"]),
        },
    )


def _demo(*, config_path: Path | None, log_path: Path) -> DemoSummary:
    """Emit sample entries through the default channel and close the manager."""

    if config_path is not None:
        settings = config_module.apply_env_overrides(config_module.load_config(config_path))
    else:
        settings = _demo_config(log_path)

    manager = LogManager(settings)
    try:
        manager.share_context(app=settings.app_name)
        logger = manager.get_default()
        logger.debug("demo starting", {"pid": os.getpid()})
        logger.info("application ready")

        request = logger.with_context(request_id="req-7f3a", user_id=42)
        request.notice("user signed in", {"ip": "127.0.0.1"})
        request.without_context("user_id").warning("profile cache miss", {"cache_key": "profile:42"})
        try:
            raise ValueError("payment provider rejected the card")
        except ValueError as exc:
            request.error_with_exception("checkout failed", exc, {"order_id": 1001})
        channel = logger.channel_name
    finally:
        result = manager.close()
    return DemoSummary(channel=channel, emitted=5, close_result=result)


def _send_test(
    webhook_url: str,
    *,
    username: str,
    emoji: str,
    channel: str | None,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> list[tuple[str, DeliveryResult]]:
    """Deliver INFO, ERROR (with exception) and WARNING samples synchronously."""

    driver = WebhookDriver(
        webhook_url,
        username=username,
        icon_emoji=emoji,
        channel=channel,
        timeout=timeout,
        transport=transport,
    )
    clock = SystemClock()
    samples = [
        LogEntry(
            "Test message from lib_log_channels",
            Level.INFO,
            clock.now(),
            {"environment": "testing", "app": __init__conf__.name, "user_id": 12345},
            channel="send-test",
        ),
        LogEntry(
            "Test error message",
            Level.ERROR,
            clock.now(),
            {"request_id": "test-123", "endpoint": "/api/test"},
            ExceptionInfo.from_exception(RuntimeError("test exception raised by send-test")),
            channel="send-test",
        ),
        LogEntry(
            "Test warning message",
            Level.WARNING,
            clock.now(),
            {"threshold": 80, "current": 85, "unit": "percent"},
            channel="send-test",
        ),
    ]
    try:
        return [(entry.level.name, driver.log(entry)) for entry in samples]
    finally:
        driver.close()


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from the nearest .env file (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool | None, use_dotenv: bool | None) -> None:
    """Root command storing global flags."""

    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        config_module.enable_dotenv()
    if ctx.invoked_subcommand is None:
        ctx.invoke(cli_info)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    __init__conf__.print_info(writer=lambda text: click.echo(text, nl=False))


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML or JSON configuration; its default channel receives the entries.",
)
@click.option(
    "--path",
    "log_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_DEMO_LOG,
    show_default=True,
    help="Log file of the built-in demo stack (ignored with --config).",
)
def cli_demo(config_path: Path | None, log_path: Path) -> None:
    """Emit sample entries showing shared context and logger context layering."""

    summary = _demo(config_path=config_path, log_path=log_path)
    click.echo(f"emitted {summary.emitted} entries via channel {summary.channel}")
    if not summary.close_result.ok:
        click.echo(f"closing channels reported: {summary.close_result.reason}", err=True)


@cli.command("send-test", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("webhook_url")
@click.option("--username", default=config_module.DEFAULT_APP_NAME, show_default=True, help="Sender name shown by the chat service.")
@click.option("--emoji", default=":robot_face:", show_default=True, help="Icon emoji of the sender.")
@click.option("--channel", "target_channel", default=None, help="Override the webhook's target channel.")
@click.option("--timeout", type=float, default=config_module.DEFAULT_WEBHOOK_TIMEOUT, show_default=True, help="Request timeout in seconds.")
@click.pass_context
def cli_send_test(
    ctx: click.Context,
    webhook_url: str,
    username: str,
    emoji: str,
    target_channel: str | None,
    timeout: float,
) -> None:
    """Send INFO, ERROR and WARNING test messages to WEBHOOK_URL."""

    try:
        results = _send_test(webhook_url, username=username, emoji=emoji, channel=target_channel, timeout=timeout)
    except DriverConfigurationError as exc:
        raise click.BadParameter(str(exc), param_hint="WEBHOOK_URL") from exc
    failed = False
    for label, result in results:
        if result.ok:
            click.echo(f"{label}: sent")
        else:
            failed = True
            click.echo(f"{label}: failed ({result.reason})")
    if failed:
        ctx.exit(1)


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the CLI with lib_cli_exit_tools and restore traceback preferences.

    Parameters
    ----------
    argv:
        Optional argument list; ``sys.argv[1:]`` when ``None``.

    Returns
    -------
    int
        Process exit code.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["DemoSummary", "cli", "main"]
