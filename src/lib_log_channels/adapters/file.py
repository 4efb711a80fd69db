"""Append-only file driver.

Purpose
-------
Write each accepted entry as a human-readable multi-line record to a single
file, creating parent directories on demand.

System Role
-----------
Default destination of :func:`lib_log_channels.config.default_config`. Writes
from one driver instance are serialised by a lock so records from concurrent
threads never interleave. Rotation settings in
:class:`~lib_log_channels.config.FileConfig` are carried but not acted upon.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TextIO

from lib_log_channels.config import DEFAULT_DATE_FORMAT, ChannelConfig, FileConfig
from lib_log_channels.domain.events import LogEntry
from lib_log_channels.domain.results import DeliveryResult
from lib_log_channels.errors import DriverConfigurationError

from ._formatting import format_file_record

LOGGER = logging.getLogger(__name__)


class FileDriver:
    """Append formatted records to ``path``.

    Parameters
    ----------
    path:
        Destination file; parent directories are created.
    date_format:
        ``strftime`` pattern of the record header timestamp.
    permission:
        Optional octal mode string (``"0644"``) applied after opening.

    Raises
    ------
    DriverConfigurationError
        The directory or the file cannot be created or opened.

    Examples
    --------
    >>> import tempfile
    >>> from datetime import datetime, timezone
    >>> from lib_log_channels.domain.levels import Level
    >>> tmp = tempfile.mkdtemp()
    >>> driver = FileDriver(Path(tmp) / "nested" / "app.log")
    >>> entry = LogEntry("hello", Level.INFO, datetime(2025, 1, 1, tzinfo=timezone.utc), channel="app")
    >>> driver.log(entry).ok
    True
    >>> driver.close().ok
    True
    >>> "app.INFO: hello" in (Path(tmp) / "nested" / "app.log").read_text(encoding="utf-8")
    True
    """

    def __init__(self, path: str | os.PathLike[str], *, date_format: str = DEFAULT_DATE_FORMAT, permission: str | None = None) -> None:
        self._path = Path(path)
        self._date_format = date_format or DEFAULT_DATE_FORMAT
        self._lock = threading.Lock()
        mode: int | None = None
        if permission:
            try:
                mode = int(permission, 8)
            except ValueError as exc:
                raise DriverConfigurationError(f"invalid permission {permission!r} for log file {self._path}") from exc
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            handle = self._path.open("a", encoding="utf-8")
        except (OSError, ValueError) as exc:
            raise DriverConfigurationError(f"failed to open log file {self._path}: {exc}") from exc
        if mode is not None:
            try:
                os.chmod(self._path, mode)
            except OSError as exc:
                handle.close()
                raise DriverConfigurationError(f"failed to set permission of log file {self._path}: {exc}") from exc
        self._handle: TextIO | None = handle

    @property
    def name(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path

    def log(self, entry: LogEntry) -> DeliveryResult:
        """Append the record of ``entry`` and flush it to the OS."""

        record = format_file_record(entry, self._date_format)
        with self._lock:
            if self._handle is None:
                return DeliveryResult.failure(self.name, f"log file {self._path} is closed")
            try:
                self._handle.write(record)
                self._handle.flush()
            except (OSError, ValueError) as exc:
                LOGGER.debug("writing to %s failed", self._path, exc_info=True)
                return DeliveryResult.failure(self.name, f"write to {self._path} failed: {exc}", exc)
        return DeliveryResult.success(self.name)

    def flush(self) -> DeliveryResult:
        """Force buffered records onto disk."""

        with self._lock:
            if self._handle is None:
                return DeliveryResult.success(self.name)
            try:
                self._handle.flush()
                os.fsync(self._handle.fileno())
            except (OSError, ValueError) as exc:
                return DeliveryResult.failure(self.name, f"flush of {self._path} failed: {exc}", exc)
        return DeliveryResult.success(self.name)

    def close(self) -> DeliveryResult:
        """Close the file handle; further calls are no-ops."""

        with self._lock:
            handle, self._handle = self._handle, None
            if handle is None:
                return DeliveryResult.success(self.name)
            try:
                handle.close()
            except OSError as exc:
                return DeliveryResult.failure(self.name, f"closing {self._path} failed: {exc}", exc)
        return DeliveryResult.success(self.name)

    def __repr__(self) -> str:
        return f"FileDriver(path={str(self._path)!r})"


def create_file_driver(config: ChannelConfig) -> FileDriver:
    """Registry factory for the ``file`` kind."""

    settings = config.file or FileConfig()
    return FileDriver(settings.path or "logs/app.log", date_format=settings.date_format, permission=settings.permission)


__all__ = ["FileDriver", "create_file_driver"]
