"""Ports describing the file sink and the writable base directory.

Purpose
-------
Keep the facade independent of the rotation engine and of how a platform
chooses its writable location.

Contents
--------
* :data:`BaseDirectoryProvider` - zero-argument callable returning a ``Path``.
* :data:`DiagnosticHook` - callback receiving storage fault reports.
* :data:`RotationHook` - callback receiving the path of each newly started file.
* :class:`DeletionReport` - outcome of a bulk delete.
* :class:`FileSinkPort` - protocol implemented by the rotating sink.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

BaseDirectoryProvider = Callable[[], Path]
DiagnosticHook = Callable[[str, dict[str, Any]], None]
RotationHook = Callable[[Path], None]


@dataclass(slots=True)
class DeletionReport:
    """Files removed by a bulk delete and the ones that could not be removed."""

    deleted: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@runtime_checkable
class FileSinkPort(Protocol):
    """Append formatted lines to rotating files."""

    def prepare(self) -> bool: ...

    def write(self, text: str) -> bool: ...

    def delete_all(self) -> DeletionReport: ...

    @property
    def directory(self) -> Path | None: ...

    @property
    def current_path(self) -> Path | None: ...


__all__ = ["BaseDirectoryProvider", "DeletionReport", "DiagnosticHook", "FileSinkPort", "RotationHook"]
