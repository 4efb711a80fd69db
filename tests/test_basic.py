"""Behavioral tests for the package metadata banner."""

from __future__ import annotations

import pytest

import lib_log_channels
from lib_log_channels import __init__conf__


def test_print_info_writes_banner_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    __init__conf__.print_info()
    captured = capsys.readouterr()

    assert captured.out.startswith("Info for lib_log_channels:\n\n")
    assert f"version       = {__init__conf__.version}\n" in captured.out
    assert captured.err == ""


def test_print_info_uses_custom_writer() -> None:
    chunks: list[str] = []

    __init__conf__.print_info(writer=chunks.append)

    assert chunks[0] == "Info for lib_log_channels:\n\n"
    assert chunks[-1] == f"    shell_command = {__init__conf__.shell_command}\n"


def test_public_api_lists_exported_names() -> None:
    missing = [name for name in lib_log_channels.__all__ if not hasattr(lib_log_channels, name)]

    assert missing == []
