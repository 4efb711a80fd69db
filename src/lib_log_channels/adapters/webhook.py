"""Slack-style incoming-webhook driver.

Purpose
-------
Turn a log entry into a chat message with one coloured attachment and POST it
as JSON to an incoming-webhook URL using :mod:`httpx`.

Contents
--------
* :func:`build_payload` – the JSON body for one entry.
* :class:`WebhookDriver` – synchronous or fire-and-forget delivery.
* :func:`create_webhook_driver` – registry factory for ``webhook``/``slack``.

System Role
-----------
Remote alerting sink, usually configured with a high minimum level. No retry
is attempted; asynchronous deliveries run on untracked daemon threads, so
messages still in flight when the process exits are lost.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

import httpx

from lib_log_channels.config import ChannelConfig, DEFAULT_APP_NAME, DEFAULT_WEBHOOK_TIMEOUT
from lib_log_channels.domain.events import LogEntry
from lib_log_channels.domain.results import DeliveryResult
from lib_log_channels.errors import DriverConfigurationError

from ._formatting import render_webhook_value, title_case_key

LOGGER = logging.getLogger(__name__)

SHORT_FIELD_LIMIT = 40
DEFAULT_ICON_EMOJI = ":robot_face:"


def _field(title: str, value: str, short: bool) -> dict[str, Any]:
    return {"title": title, "value": value, "short": short}


def build_payload(
    entry: LogEntry,
    *,
    username: str = DEFAULT_APP_NAME,
    icon_emoji: str | None = DEFAULT_ICON_EMOJI,
    icon_url: str | None = None,
    channel: str | None = None,
    footer_icon: str | None = None,
) -> dict[str, Any]:
    """Return the webhook message for ``entry``.

    Context fields are ``short`` (rendered side by side) when their value is
    shorter than 40 characters. An icon URL replaces the emoji. ``footer_icon``
    is only included when configured.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_channels.domain.levels import Level
    >>> entry = LogEntry("Disk low", Level.WARNING, datetime(2025, 1, 1, tzinfo=timezone.utc), {"free_mb": 12}, channel="ops")
    >>> payload = build_payload(entry, username="Ops", icon_url="https://example.invalid/icon.png")
    >>> "icon_emoji" in payload, payload["attachments"][0]["footer"]
    (False, 'Ops | ops')
    >>> [field["title"] for field in payload["attachments"][0]["fields"]]
    ['Message', 'Level', 'Free_Mb']
    """

    fields = [_field("Message", entry.message, False), _field("Level", entry.level.name, True)]
    for key, value in entry.context.items():
        rendered = render_webhook_value(value)
        fields.append(_field(title_case_key(key), rendered, len(rendered) < SHORT_FIELD_LIMIT))
    if entry.exception is not None:
        fields.append(_field("Exception", f"```{entry.exception_json()}```", False))

    attachment: dict[str, Any] = {
        "color": entry.level.webhook_color,
        "title": f"{entry.level.icon} {entry.level.name}",
        "ts": int(entry.timestamp.timestamp()),
        "fields": fields,
        "footer": f"{username} | {entry.channel or 'default'}",
        "mrkdwn_in": ["text", "fields"],
    }
    if footer_icon:
        attachment["footer_icon"] = footer_icon

    payload: dict[str, Any] = {"username": username}
    if icon_url:
        payload["icon_url"] = icon_url
    elif icon_emoji:
        payload["icon_emoji"] = icon_emoji
    if channel:
        payload["channel"] = channel
    payload["attachments"] = [attachment]
    return payload


class WebhookDriver:
    """Deliver entries to an incoming-webhook endpoint.

    Parameters
    ----------
    webhook_url:
        Endpoint receiving the JSON ``POST``.
    timeout:
        Seconds before a request is abandoned.
    asynchronous:
        When ``True`` every delivery runs on its own daemon thread and
        :meth:`log` reports success immediately.
    transport:
        Optional :class:`httpx.BaseTransport` (tests pass
        :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        username: str = DEFAULT_APP_NAME,
        icon_emoji: str | None = DEFAULT_ICON_EMOJI,
        icon_url: str | None = None,
        channel: str | None = None,
        timeout: float = DEFAULT_WEBHOOK_TIMEOUT,
        asynchronous: bool = False,
        footer_icon: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not webhook_url:
            raise DriverConfigurationError("webhook URL is required")
        try:
            httpx.URL(webhook_url)
        except httpx.InvalidURL as exc:
            raise DriverConfigurationError(f"invalid webhook URL: {exc}") from exc
        self._url = webhook_url
        self._username = username or DEFAULT_APP_NAME
        self._icon_emoji = None if icon_url else (icon_emoji or DEFAULT_ICON_EMOJI)
        self._icon_url = icon_url
        self._channel = channel
        self._footer_icon = footer_icon
        self._asynchronous = asynchronous
        self._client = httpx.Client(timeout=timeout or DEFAULT_WEBHOOK_TIMEOUT, transport=transport)

    @property
    def name(self) -> str:
        return "webhook"

    @property
    def asynchronous(self) -> bool:
        return self._asynchronous

    def build_payload(self, entry: LogEntry) -> dict[str, Any]:
        return build_payload(
            entry,
            username=self._username,
            icon_emoji=self._icon_emoji,
            icon_url=self._icon_url,
            channel=self._channel,
            footer_icon=self._footer_icon,
        )

    def log(self, entry: LogEntry) -> DeliveryResult:
        """Send ``entry``; in asynchronous mode failures are only logged."""

        payload = self.build_payload(entry)
        if self._asynchronous:
            worker = threading.Thread(target=self._send_detached, args=(payload,), name="lib-log-channels-webhook", daemon=True)
            worker.start()
            return DeliveryResult.success(self.name)
        return self._send(payload)

    def _send(self, payload: Mapping[str, Any]) -> DeliveryResult:
        try:
            response = self._client.post(self._url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as exc:
            return DeliveryResult.failure(self.name, f"webhook request failed: {exc}", exc)
        if not response.is_success:
            return DeliveryResult.failure(self.name, f"webhook returned status {response.status_code}")
        return DeliveryResult.success(self.name)

    def _send_detached(self, payload: Mapping[str, Any]) -> None:
        result = self._send(payload)
        if not result.ok:
            LOGGER.debug("asynchronous webhook delivery dropped: %s", result.reason)

    def close(self) -> DeliveryResult:
        """Close the HTTP client; in-flight asynchronous sends are not awaited."""

        self._client.close()
        return DeliveryResult.success(self.name)

    def __repr__(self) -> str:
        return f"WebhookDriver(asynchronous={self._asynchronous})"


def create_webhook_driver(config: ChannelConfig) -> WebhookDriver:
    """Registry factory for the ``webhook`` and ``slack`` kinds."""

    settings = config.webhook
    if settings is None or not settings.webhook_url:
        raise DriverConfigurationError("webhook URL is required")
    return WebhookDriver(
        settings.webhook_url,
        username=settings.username,
        icon_emoji=settings.icon_emoji,
        icon_url=settings.icon_url,
        channel=settings.channel,
        timeout=settings.timeout,
        asynchronous=settings.asynchronous,
        footer_icon=settings.footer_icon,
    )


__all__ = ["SHORT_FIELD_LIMIT", "WebhookDriver", "build_payload", "create_webhook_driver"]
