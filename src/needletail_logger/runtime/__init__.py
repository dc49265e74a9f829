"""Runtime façade exposing :class:`NeedleTailLogger`.

Purpose
-------
Give host applications one object to construct and call instead of wiring the
formatter, backends and file sink themselves.

Contents
--------
* :class:`NeedleTailLogger` - leveled facade with file rotation.
* :func:`summary_info` - metadata banner used by the CLI.

System Role
-----------
Outer shell of the package: configuration is turned into adapters once at
construction (see :mod:`._composition`), after which every ``log`` call runs
the pipeline built by
:func:`needletail_logger.application.use_cases.create_process_log_event`.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

from needletail_logger.adapters import SystemClock
from needletail_logger.application.ports import (
    BaseDirectoryProvider,
    ClockPort,
    ConsolePort,
    DeletionReport,
    FileSinkPort,
)
from needletail_logger.application.use_cases import (
    ProcessResult,
    create_diagnostic_reporter,
    create_process_log_event,
    emit_to_console,
    format_message,
)
from needletail_logger.config import LoggerConfig
from needletail_logger.domain import LogLevel, LogMessage, coerce_level

from ._composition import create_console, create_file_sink, resolve_base_directory


class NeedleTailLogger:
    """Leveled logger writing to a console backend and, optionally, rotating files.

    Parameters
    ----------
    config:
        Complete configuration. When omitted, ``settings`` keyword arguments
        are passed to :class:`LoggerConfig`; when both are given the keywords
        replace fields of ``config``.
    console:
        Backend receiving formatted text and metadata. Defaults to the adapter
        named by ``config.backend``.
    directory_provider:
        Callable returning the writable base directory. Defaults to
        ``config.base_directory`` or the platform location.
    clock:
        Source of rotation timestamps.
    file_sink:
        Replacement for the rotating sink, mainly for tests.

    Examples
    --------
    >>> import tempfile
    >>> class Lines:
    ...     def __init__(self):
    ...         self.seen = []
    ...     def emit(self, level, text, metadata):
    ...         self.seen.append(text)
    >>> console = Lines()
    >>> logger = NeedleTailLogger(console=console, label="doc", level="info", base_directory=tempfile.mkdtemp())
    >>> logger.log(LogLevel.TRACE, "ignored")
    {'ok': False, 'reason': 'below_threshold'}
    >>> logger.error("failed to encode", display_icons=False)["ok"]
    True
    >>> console.seen
    ['FAILED TO ENCODE']
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        console: ConsolePort | None = None,
        directory_provider: BaseDirectoryProvider | None = None,
        clock: ClockPort | None = None,
        file_sink: FileSinkPort | None = None,
        **settings: Any,
    ) -> None:
        if config is None:
            config = LoggerConfig(**settings)
        elif settings:
            config = replace(config, **settings)
        self._config = config
        self._config_lock = threading.Lock()
        self._console = console if console is not None else create_console(config)
        if file_sink is None:
            file_sink = create_file_sink(
                config,
                base_directory=resolve_base_directory(config, directory_provider),
                clock=clock or SystemClock(),
                diagnostic=create_diagnostic_reporter(self._console),
                on_rotate=self._announce_new_file,
            )
        self._file_sink = file_sink
        self._process = create_process_log_event(
            settings=lambda: self._config,
            console=self._console,
            file_sink=self._file_sink,
        )
        if config.write_to_file:
            self._file_sink.prepare()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def label(self) -> str:
        return self._config.label

    @property
    def level(self) -> LogLevel:
        return self._config.level

    @property
    def write_to_file(self) -> bool:
        return self._config.write_to_file

    @property
    def console(self) -> ConsolePort:
        return self._console

    @property
    def log_directory(self) -> Path | None:
        """Return the label directory once file writing has been prepared."""

        return self._file_sink.directory

    @property
    def current_log_file(self) -> Path | None:
        return self._file_sink.current_path

    def configure(self, level: str | LogLevel) -> None:
        """Replace the threshold for all subsequent calls."""

        with self._config_lock:
            self._config = self._config.with_level(coerce_level(level))
            threshold = self._config.level
        self._announce(f"Log level set to {threshold.severity}")

    set_log_level = configure

    def set_file_writing_enabled(self, enabled: bool) -> None:
        """Toggle file forwarding for future calls; enabling prepares the sink."""

        with self._config_lock:
            self._config = self._config.with_write_to_file(enabled)
        if enabled:
            self._file_sink.prepare()

    def log(
        self,
        level: str | LogLevel,
        message: str | LogMessage,
        metadata: Mapping[str, Any] | None = None,
        *,
        display_icons: bool = True,
    ) -> ProcessResult:
        """Filter, format and forward one message.

        Safe to call from many threads at once. Storage faults are reported on
        the console backend and reflected in the returned ``reason``; they are
        never raised.
        """

        return self._process(coerce_level(level), message, metadata, display_icons=display_icons)

    async def log_async(
        self,
        level: str | LogLevel,
        message: str | LogMessage,
        metadata: Mapping[str, Any] | None = None,
        *,
        display_icons: bool = True,
    ) -> ProcessResult:
        """Run :meth:`log` in a worker thread so event loops are not blocked by file I/O."""

        return await asyncio.to_thread(self.log, level, message, metadata, display_icons=display_icons)

    def trace(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.TRACE, message, metadata, **kwargs)

    def debug(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.DEBUG, message, metadata, **kwargs)

    def info(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.INFO, message, metadata, **kwargs)

    def notice(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.NOTICE, message, metadata, **kwargs)

    def warning(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.WARNING, message, metadata, **kwargs)

    def error(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.ERROR, message, metadata, **kwargs)

    def critical(self, message: str | LogMessage, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> ProcessResult:
        return self.log(LogLevel.CRITICAL, message, metadata, **kwargs)

    def delete_all_log_files(self) -> DeletionReport:
        """Remove every file in this logger's log directory.

        Each deleted file is announced on the console backend; failures are
        reported individually by the sink and do not stop the remaining
        deletions.
        """

        report = self._file_sink.delete_all()
        for path in report.deleted:
            self._announce(f"Deleted log file: {path.name}")
        if report.ok:
            self._announce("All log files deleted successfully.")
        return report

    def _announce_new_file(self, path: Path) -> None:
        self._announce(f"Created new log file: {path.name}")

    def _announce(self, text: str) -> None:
        """Send a housekeeping notice to the console backend only, at INFO."""

        if LogLevel.INFO < self._config.level:
            return
        formatted = format_message(LogLevel.INFO, text, max_line_width=self._config.max_line_width)
        emit_to_console(self._console, LogLevel.INFO, formatted.text, None)

    def __repr__(self) -> str:
        config = self._config
        return f"NeedleTailLogger(label={config.label!r}, level={config.level.severity!r}, write_to_file={config.write_to_file})"


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from .. import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = ["NeedleTailLogger", "summary_info"]
