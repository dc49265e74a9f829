"""Append-only file sink with line-count rotation.

Purpose
-------
Persist formatted log lines to plain UTF-8 files below a label-specific
directory, starting a fresh timestamped file once the active one holds
``max_lines`` records.

Contents
--------
* :class:`LogFileHandle` - the current path and its known line count.
* :class:`RotatingFileSink` - implementation of :class:`FileSinkPort`.
* :func:`rotated_file_name` / :func:`safe_directory_name` - naming helpers.

System Role
-----------
The only shared mutable state in the logger. One lock covers the whole
"check count, maybe rotate, append" sequence so concurrent writers can never
both observe a non-full file and overfill it, and their lines never interleave.

Alignment Notes
---------------
Storage faults never propagate to callers of ``log``. They are reported once
through the diagnostic hook (wired to the console backend by the facade) and
the affected operation is abandoned for that call only.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, TypeVar

from needletail_logger.application.ports.files import (
    BaseDirectoryProvider,
    DeletionReport,
    DiagnosticHook,
    FileSinkPort,
    RotationHook,
)
from needletail_logger.application.ports.time import ClockPort

LOGGER = logging.getLogger(__name__)

ACTIVE_FILE_NAME = "logs.txt"
ROTATION_MARKER_PREFIX = "Log file rotated at "

FAULT_EVENTS: tuple[str, ...] = (
    "log_directory_failed",
    "log_file_read_failed",
    "log_file_append_failed",
    "log_file_rotate_failed",
    "log_file_delete_failed",
    "log_directory_list_failed",
)
"""Diagnostic event names emitted by :class:`RotatingFileSink`."""

_UNSAFE_PATH_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

T = TypeVar("T")


def safe_directory_name(label: str) -> str:
    """Return ``label`` with path-illegal characters replaced.

    Examples
    --------
    >>> safe_directory_name("billing/api: eu")
    'billing_api_ eu'
    >>> safe_directory_name("  ")
    'logs'
    """

    cleaned = _UNSAFE_PATH_CHARS.sub("_", label).strip().strip(".")
    return cleaned or "logs"


def rotated_file_name(moment: datetime, suffix: int = 0) -> str:
    """Return the sortable name for a file started at ``moment``.

    Examples
    --------
    >>> rotated_file_name(datetime(2026, 10, 17, 8, 30, 5, tzinfo=timezone.utc))
    'logs_2026-10-17T08-30-05.000000+00-00.txt'
    >>> rotated_file_name(datetime(2026, 10, 17, 8, 30, 5, tzinfo=timezone.utc), 2)
    'logs_2026-10-17T08-30-05.000000+00-00_2.txt'
    """

    stamp = moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace(":", "-")
    tail = f"_{suffix}" if suffix else ""
    return f"logs_{stamp}{tail}.txt"


class _StorageFault(Exception):
    """Internal carrier for an :class:`OSError` tagged with its diagnostic event."""

    def __init__(self, event: str, path: Path | None, error: BaseException) -> None:
        super().__init__(f"{event}: {error}")
        self.event = event
        self.path = path
        self.error = error


def _guard(event: str, path: Path | None, action: Callable[[], T]) -> T:
    try:
        return action()
    except OSError as exc:
        raise _StorageFault(event, path, exc) from exc


def _count_records(path: Path) -> int:
    """Count newline-delimited lines, ignoring a leading rotation marker."""

    count = 0
    with path.open("r", encoding="utf-8", errors="replace", newline="\n") as handle:
        for index, line in enumerate(handle):
            if index == 0 and line.startswith(ROTATION_MARKER_PREFIX):
                continue
            count += 1
    return count


def _append_line(path: Path, text: str) -> None:
    with path.open("a", encoding="utf-8", newline="") as handle:
        handle.write(text + "\n")


@dataclass(slots=True)
class LogFileHandle:
    """Current log file and the number of records it holds.

    ``path`` is ``None`` until the sink is prepared and again after a bulk
    delete. Only :class:`RotatingFileSink` mutates it, always under its lock.
    """

    path: Path | None = None
    line_count: int = 0


class RotatingFileSink(FileSinkPort):
    """Write formatted lines to ``<base>/<label>/logs.txt`` and its successors.

    Examples
    --------
    >>> import tempfile
    >>> from needletail_logger.adapters.clock import SystemClock
    >>> base = Path(tempfile.mkdtemp())
    >>> sink = RotatingFileSink(label="demo", max_lines=2, base_directory=lambda: base, clock=SystemClock())
    >>> all(sink.write(f"line {n}") for n in range(3))
    True
    >>> len(list((base / "demo").iterdir()))
    2
    """

    def __init__(
        self,
        *,
        label: str,
        max_lines: int,
        base_directory: BaseDirectoryProvider,
        clock: ClockPort,
        diagnostic: DiagnosticHook | None = None,
        on_rotate: RotationHook | None = None,
    ) -> None:
        if max_lines <= 0:
            raise ValueError("max_lines must be positive")
        self._directory_name = safe_directory_name(label)
        self._max_lines = max_lines
        self._base_directory = base_directory
        self._clock = clock
        self._diagnostic = diagnostic
        self._on_rotate = on_rotate
        self._started: list[Path] = []
        self._lock = threading.Lock()
        self._handle = LogFileHandle()
        self._directory: Path | None = None

    @property
    def max_lines(self) -> int:
        return self._max_lines

    @property
    def directory(self) -> Path | None:
        """Return the label directory once it has been resolved."""

        with self._lock:
            return self._directory

    @property
    def current_path(self) -> Path | None:
        """Return the file the next write will target (before any rotation)."""

        with self._lock:
            return self._handle.path

    @property
    def line_count(self) -> int:
        with self._lock:
            return self._handle.line_count

    def prepare(self) -> bool:
        """Resolve the directory and active file, rotating a full one immediately.

        Only the first call, or a call after the active file disappeared, does
        any work; later calls keep the current file and its count.
        """

        fault: _StorageFault | None = None
        with self._lock:
            try:
                self._active_path_locked()
            except _StorageFault as exc:
                fault = exc
            started = self._take_started_locked()
        return self._settle(fault, started)

    def write(self, text: str) -> bool:
        """Append ``text`` as one record, rotating first when the file is full.

        Returns ``False`` when a storage fault abandoned the write; the fault
        has already been reported through the diagnostic hook.
        """

        fault: _StorageFault | None = None
        with self._lock:
            try:
                path = self._active_path_locked()
                if self._handle.line_count >= self._max_lines:
                    path = self._rotate_locked()
                _guard("log_file_append_failed", path, lambda: _append_line(path, text))
                self._handle.line_count += text.count("\n") + 1
            except _StorageFault as exc:
                fault = exc
            started = self._take_started_locked()
        return self._settle(fault, started)

    def rotate(self) -> Path | None:
        """Start a new file now, regardless of the current line count."""

        fault: _StorageFault | None = None
        path: Path | None = None
        with self._lock:
            try:
                self._active_path_locked()
                path = self._rotate_locked()
            except _StorageFault as exc:
                fault = exc
            started = self._take_started_locked()
        self._settle(fault, started)
        return path

    def delete_all(self) -> DeletionReport:
        """Remove every file in the label directory, one attempt per file.

        A failure on one file is recorded and reported; the remaining files are
        still attempted. The handle is reset so the next write recreates
        ``logs.txt``.
        """

        report = DeletionReport()
        faults: list[_StorageFault] = []
        with self._lock:
            try:
                directory = self._directory or self._resolve_directory(create=False)
            except _StorageFault as exc:
                faults.append(exc)
                directory = None
            for entry in self._list_files(directory, faults):
                try:
                    entry.unlink()
                except FileNotFoundError:
                    continue
                except OSError as exc:
                    report.failed.append((entry, str(exc)))
                    faults.append(_StorageFault("log_file_delete_failed", entry, exc))
                else:
                    report.deleted.append(entry)
                    LOGGER.debug("Deleted log file %s", entry)
            self._handle = LogFileHandle()
        for fault in faults:
            self._report(fault)
        return report

    def _list_files(self, directory: Path | None, faults: list[_StorageFault]) -> list[Path]:
        if directory is None:
            return []
        try:
            return sorted(entry for entry in directory.iterdir() if entry.is_file())
        except FileNotFoundError:
            return []
        except OSError as exc:
            faults.append(_StorageFault("log_directory_list_failed", directory, exc))
            return []

    def _resolve_directory(self, *, create: bool) -> Path:
        base = _guard("log_directory_failed", None, self._base_directory)
        directory = Path(base) / self._directory_name
        if create:
            _guard("log_directory_failed", directory, lambda: directory.mkdir(parents=True, exist_ok=True))
        return directory

    def _prepare_locked(self) -> Path:
        directory = self._resolve_directory(create=True)
        active = directory / ACTIVE_FILE_NAME
        if active.exists():
            count = _guard("log_file_read_failed", active, lambda: _count_records(active))
        else:
            _guard("log_file_append_failed", active, lambda: active.touch())
            count = 0
        self._directory = directory
        self._handle = LogFileHandle(path=active, line_count=count)
        if count >= self._max_lines:
            return self._rotate_locked()
        return active

    def _active_path_locked(self) -> Path:
        path = self._handle.path
        if path is None or not path.exists():
            return self._prepare_locked()
        return path

    def _rotate_locked(self) -> Path:
        current = self._handle.path
        directory = current.parent if current is not None else self._resolve_directory(create=True)
        moment = self._clock.now()
        marker = f"{ROTATION_MARKER_PREFIX}{moment.isoformat()}\n"
        suffix = 0
        while True:
            candidate = directory / rotated_file_name(moment, suffix)
            try:
                with candidate.open("x", encoding="utf-8", newline="") as handle:
                    handle.write(marker)
            except FileExistsError:
                suffix += 1
                continue
            except OSError as exc:
                raise _StorageFault("log_file_rotate_failed", candidate, exc) from exc
            break
        self._handle = LogFileHandle(path=candidate, line_count=0)
        self._started.append(candidate)
        LOGGER.debug("Created new log file: %s", candidate)
        return candidate

    def _take_started_locked(self) -> list[Path]:
        started, self._started = self._started, []
        return started

    def _settle(self, fault: _StorageFault | None, started: list[Path]) -> bool:
        if self._on_rotate is not None:
            for path in started:
                self._on_rotate(path)
        if fault is None:
            return True
        self._report(fault)
        return False

    def _report(self, fault: _StorageFault) -> None:
        payload: dict[str, Any] = {"error": str(fault.error)}
        if fault.path is not None:
            payload["path"] = str(fault.path)
        if self._diagnostic is None:
            LOGGER.error("%s %s", fault.event, payload)
            return
        self._diagnostic(fault.event, payload)


__all__ = [
    "ACTIVE_FILE_NAME",
    "FAULT_EVENTS",
    "LogFileHandle",
    "ROTATION_MARKER_PREFIX",
    "RotatingFileSink",
    "rotated_file_name",
    "safe_directory_name",
]
