"""System and framework backends."""

from __future__ import annotations

from .journald import JournaldAdapter
from .stdlib_logging import StdlibLoggingAdapter

__all__ = ["JournaldAdapter", "StdlibLoggingAdapter"]
