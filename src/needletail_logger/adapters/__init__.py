"""Adapters implementing the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .console import RichConsoleAdapter
from .files import RotatingFileSink, default_base_directory, fixed_base_directory
from .structured import JournaldAdapter, StdlibLoggingAdapter

__all__ = [
    "JournaldAdapter",
    "RichConsoleAdapter",
    "RotatingFileSink",
    "StdlibLoggingAdapter",
    "SystemClock",
    "default_base_directory",
    "fixed_base_directory",
]
