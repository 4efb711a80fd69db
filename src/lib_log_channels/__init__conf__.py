"""Static package metadata surfaced by the CLI banner.

Values mirror ``pyproject.toml``; keep both in sync when releasing.
"""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_channels"
title = "Multi-channel structured logging with file, webhook and stack drivers"
version = "0.1.0"
shell_command = "lib_log_channels"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner through ``writer`` (one line per call)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    writer = writer or sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
