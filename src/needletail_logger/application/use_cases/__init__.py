"""Use cases composing the logging pipeline."""

from __future__ import annotations

from .format_message import DEBUG_DIVIDER, FormattedMessage, format_message, paginate
from .process_event import ProcessResult, create_diagnostic_reporter, create_process_log_event, emit_to_console

__all__ = [
    "DEBUG_DIVIDER",
    "FormattedMessage",
    "ProcessResult",
    "create_diagnostic_reporter",
    "create_process_log_event",
    "emit_to_console",
    "format_message",
    "paginate",
]
