"""Use case orchestrating a single ``log`` call.

Purpose
-------
Tie together the threshold check, debug gating, formatting, console emission
and file forwarding in the order the facade guarantees.

Contents
--------
* :class:`PipelineSettings` - protocol for the configuration snapshot read per call.
* :func:`create_process_log_event` - factory returning the runtime callable.
* :func:`create_diagnostic_reporter` - routes storage faults to the console.

System Role
-----------
Application-layer orchestrator invoked by :class:`needletail_logger.NeedleTailLogger`.
The callable holds no mutable state of its own; serialisation of file writes
lives entirely inside the file sink.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from needletail_logger.application.ports import ConsolePort, DiagnosticHook, FileSinkPort
from needletail_logger.domain import LogLevel, LogMessage, MetadataValue, coerce_message, coerce_metadata

from .format_message import format_message

logger = logging.getLogger(__name__)

ProcessResult = dict[str, Any]

SKIP_REASONS: tuple[str, str] = ("below_threshold", "debug_disabled")
FAILURE_REASONS: tuple[str, str] = ("adapter_error", "file_error")


class PipelineSettings(Protocol):
    level: LogLevel
    max_line_width: int
    write_to_file: bool
    debug_enabled: bool


class ProcessCallable(Protocol):
    def __call__(
        self,
        level: LogLevel,
        message: str | LogMessage,
        metadata: Mapping[str, Any] | None = None,
        *,
        display_icons: bool = True,
    ) -> ProcessResult: ...


def create_process_log_event(
    *,
    settings: Callable[[], PipelineSettings],
    console: ConsolePort,
    file_sink: FileSinkPort,
) -> ProcessCallable:
    """Build the per-call pipeline.

    Parameters
    ----------
    settings:
        Returns the configuration snapshot in effect. Called once per log call
        so mutations made by the facade apply to every later call.
    console:
        Backend receiving the formatted text and the caller's metadata.
    file_sink:
        Rotating sink receiving the formatted text when file writing is on.

    Returns
    -------
    ProcessCallable
        Function accepting ``level``, ``message``, optional ``metadata`` and
        ``display_icons``, returning a result dictionary with an ``ok`` flag.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Settings:
    ...     level: LogLevel = LogLevel.INFO
    ...     max_line_width: int = 80
    ...     write_to_file: bool = False
    ...     debug_enabled: bool = True
    >>> class Console:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def emit(self, level, text, metadata):
    ...         self.lines.append(text)
    >>> console = Console()
    >>> process = create_process_log_event(settings=Settings, console=console, file_sink=None)
    >>> process(LogLevel.ERROR, "boom", display_icons=False)
    {'ok': True, 'level': 'error', 'file': False}
    >>> process(LogLevel.DEBUG, "hidden")
    {'ok': False, 'reason': 'below_threshold'}
    >>> console.lines
    ['BOOM']
    """

    def process(
        level: LogLevel,
        message: str | LogMessage,
        metadata: Mapping[str, Any] | None = None,
        *,
        display_icons: bool = True,
    ) -> ProcessResult:
        current = settings()
        if level < current.level:
            return {"ok": False, "reason": "below_threshold"}
        if level is LogLevel.DEBUG and not current.debug_enabled:
            return {"ok": False, "reason": "debug_disabled"}

        raw = coerce_message(message).render()
        formatted = format_message(
            level,
            raw,
            max_line_width=current.max_line_width,
            display_icons=display_icons,
        )
        structured = coerce_metadata(metadata)

        console_ok = emit_to_console(console, level, formatted.text, structured)
        file_ok = True
        if current.write_to_file:
            file_ok = file_sink.write(formatted.text)

        if not console_ok:
            return {"ok": False, "reason": "adapter_error"}
        if not file_ok:
            return {"ok": False, "reason": "file_error"}
        return {"ok": True, "level": level.severity, "file": current.write_to_file}

    return process


def emit_to_console(
    console: ConsolePort,
    level: LogLevel,
    text: str,
    metadata: Mapping[str, MetadataValue] | None,
) -> bool:
    try:
        console.emit(level, text, metadata)
    except Exception:  # noqa: BLE001 - logging must not break the caller
        logger.exception("Console backend %s failed to emit", type(console).__name__)
        return False
    return True


def create_diagnostic_reporter(console: ConsolePort) -> DiagnosticHook:
    """Return a hook that reports storage faults on the console backend.

    The file sink must never be used here: a failing disk would otherwise feed
    its own error reports back into the failing write path.
    """

    def report(event: str, payload: dict[str, Any]) -> None:
        detail = payload.get("error", "")
        path = payload.get("path")
        text = f"{event}: {detail}" if path is None else f"{event}: {path}: {detail}"
        emit_to_console(console, LogLevel.ERROR, text, coerce_metadata({"event": event, **payload}))

    return report


__all__ = [
    "FAILURE_REASONS",
    "PipelineSettings",
    "ProcessCallable",
    "ProcessResult",
    "SKIP_REASONS",
    "create_diagnostic_reporter",
    "emit_to_console",
    "create_process_log_event",
]
