"""File sink adapters."""

from __future__ import annotations

from .directories import default_base_directory, fixed_base_directory
from .rotating import ACTIVE_FILE_NAME, ROTATION_MARKER_PREFIX, LogFileHandle, RotatingFileSink

__all__ = [
    "ACTIVE_FILE_NAME",
    "LogFileHandle",
    "ROTATION_MARKER_PREFIX",
    "RotatingFileSink",
    "default_base_directory",
    "fixed_base_directory",
]
