"""Protocols the facade depends on."""

from __future__ import annotations

from .console import ConsolePort
from .files import BaseDirectoryProvider, DeletionReport, DiagnosticHook, FileSinkPort, RotationHook
from .time import ClockPort

__all__ = [
    "BaseDirectoryProvider",
    "ClockPort",
    "ConsolePort",
    "DeletionReport",
    "DiagnosticHook",
    "FileSinkPort",
    "RotationHook",
]
