"""Public package surface.

``NeedleTailLogger`` is the single entry point: it filters by level, formats
and paginates messages, forwards them to a console backend and, when enabled,
appends them to rotating log files.
"""

from __future__ import annotations

from .adapters import JournaldAdapter, RichConsoleAdapter, StdlibLoggingAdapter
from .application.ports import ConsolePort, DeletionReport
from .application.use_cases import FormattedMessage, format_message, paginate
from .config import LoggerConfig, load_config
from .domain import LogLevel, LogMessage, MetadataValue
from .runtime import NeedleTailLogger, summary_info

__all__ = [
    "ConsolePort",
    "DeletionReport",
    "FormattedMessage",
    "JournaldAdapter",
    "LogLevel",
    "LogMessage",
    "LoggerConfig",
    "MetadataValue",
    "NeedleTailLogger",
    "RichConsoleAdapter",
    "StdlibLoggingAdapter",
    "format_message",
    "load_config",
    "paginate",
    "summary_info",
]
