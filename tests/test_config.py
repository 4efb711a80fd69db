from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_log_channels import config as log_config
from lib_log_channels.config import (
    ChannelConfig,
    FileConfig,
    LoggingConfig,
    StackConfig,
    WebhookConfig,
    apply_env_overrides,
    config_from_mapping,
    default_config,
    load_config,
)
from lib_log_channels.errors import ConfigurationError

TOML_DOCUMENT = """
default = "stack"
app_name = "Shop"

[channels.file]
driver = "file"
path = "logs/shop.log"
level = "debug"
date_format = "%H:%M:%S"

[channels.slack]
driver = "slack"
level = "error"
webhook_url = "https://hooks.example.invalid/T/B/X"
slack_channel = "#alerts"
async = true
timeout = 5

[channels.stack]
driver = "stack"
channels = ["file", "slack"]
ignore_exceptions = true
"""


def test_default_config_has_single_file_channel() -> None:
    config = default_config()

    assert config.default == "file"
    assert config.app_name == "LogChannels"
    assert list(config.channels) == ["file"]
    assert config.channels["file"].file == FileConfig(path="logs/app.log")


def test_config_from_flat_mapping() -> None:
    config = config_from_mapping(
        {
            "default": "app",
            "appName": "Billing",
            "channels": {
                "app": {"driver": "file", "path": "x.log", "max_size": 5},
                "hook": {"driver": "webhook", "webhook_url": "https://h.invalid", "slack_channel": "#ops", "async": True},
                "all": {"driver": "stack", "channels": ["app", "hook"]},
                "custom": {"driver": "kafka", "topic": "logs", "level": "warning"},
            },
        }
    )

    assert config.default == "app"
    assert config.app_name == "Billing"
    assert config.channels["app"].file == FileConfig(path="x.log", max_size=5)
    hook = config.channels["hook"].webhook
    assert hook == WebhookConfig(webhook_url="https://h.invalid", username="Billing", channel="#ops", asynchronous=True)
    assert config.channels["all"].stack == StackConfig(channels=["app", "hook"])
    assert config.channels["custom"] == ChannelConfig(driver="kafka", level="warning", options={"topic": "logs"})


def test_config_from_nested_sections() -> None:
    config = config_from_mapping(
        {"channels": {"app": {"driver": "webhook", "webhook": {"url": "https://h.invalid", "username": "Bot", "timeout": "3"}}}}
    )

    webhook = config.channels["app"].webhook
    assert webhook.webhook_url == "https://h.invalid"
    assert webhook.username == "Bot"
    assert webhook.timeout == 3.0


def test_unknown_keys_of_builtin_drivers_land_in_options() -> None:
    config = config_from_mapping({"channels": {"app": {"driver": "file", "path": "a.log", "owner": "ops"}}})

    assert config.channels["app"].options == {"owner": "ops"}


@pytest.mark.parametrize(
    "data, message",
    [
        ({"channels": []}, "channels must be"),
        ({"channels": {"app": "file"}}, "must be a table"),
        ({"channels": {"app": {"level": "info"}}}, "requires a driver"),
        ({"channels": {"all": {"driver": "stack", "channels": "a,b"}}}, "list of channel names"),
        ({"channels": {"app": {"driver": "file", "file": {"colour": "red"}}}}, "invalid file settings"),
        ({"channels": {"hook": {"driver": "webhook", "url": "https://h.invalid", "timeout": "ten"}}}, "invalid webhook timeout"),
    ],
)
def test_invalid_mappings_raise_configuration_error(data: dict, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        config_from_mapping(data)


def test_load_config_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "logging.toml"
    path.write_text(TOML_DOCUMENT, encoding="utf-8")

    config = load_config(path)

    assert config.default == "stack"
    assert config.channels["file"].file.date_format == "%H:%M:%S"
    slack = config.channels["slack"]
    assert slack.driver == "slack"
    assert slack.webhook.channel == "#alerts"
    assert slack.webhook.asynchronous is True
    assert slack.webhook.timeout == 5.0
    assert slack.webhook.username == "Shop"
    assert config.channels["stack"].stack == StackConfig(channels=["file", "slack"], ignore_exceptions=True)


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "logging.json"
    path.write_text(json.dumps({"default": "app", "channels": {"app": {"driver": "console", "stream": "stdout"}}}), encoding="utf-8")

    config = load_config(path)

    assert config.channels["app"].console.stream == "stdout"


@pytest.mark.parametrize(
    "name, content",
    [
        ("logging.yaml", "default: app"),
        ("broken.toml", "default = "),
        ("broken.json", "{"),
        ("list.json", "[]"),
    ],
)
def test_load_config_rejects_bad_files(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="cannot read"):
        load_config(tmp_path / "absent.toml")


def test_env_overrides_replace_default_and_app_name() -> None:
    original = LoggingConfig(default="file", app_name="App")

    updated = apply_env_overrides(original, {"LOG_DEFAULT_CHANNEL": "stack", "LOG_APP_NAME": "Env"})

    assert (updated.default, updated.app_name) == ("stack", "Env")
    assert (original.default, original.app_name) == ("file", "App")


def test_env_overrides_read_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_DEFAULT_CHANNEL", "audit")
    monkeypatch.delenv("LOG_APP_NAME", raising=False)
    config = LoggingConfig()

    assert apply_env_overrides(config).default == "audit"


def test_env_overrides_without_variables_return_same_object() -> None:
    config = LoggingConfig()

    assert apply_env_overrides(config, {}) is config


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "yes", True),
        (None, "off", False),
        (None, "", False),
        (None, None, False),
    ],
)
def test_should_use_dotenv(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert log_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_should_use_dotenv_rejects_garbage() -> None:
    with pytest.raises(ValueError, match=log_config.DOTENV_ENV_VAR):
        log_config.should_use_dotenv(env_value="maybe")
