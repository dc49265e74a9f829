"""Adapter forwarding formatted messages to a :mod:`logging` logger.

Hosts that already configure the standard library's logging tree can select the
``logging`` backend and keep their handlers, filters and formatters.
"""

from __future__ import annotations

import logging
from typing import Mapping

from needletail_logger.application.ports.console import ConsolePort
from needletail_logger.domain.levels import LogLevel
from needletail_logger.domain.metadata import MetadataValue


class StdlibLoggingAdapter(ConsolePort):
    """Emit through ``logging.getLogger(label)`` (or an injected logger)."""

    def __init__(self, *, label: str, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(label)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> None:
        extra = {"metadata": {key: value.to_python() for key, value in (metadata or {}).items()}}
        self._logger.log(level.to_python_level(), text, extra=extra)


__all__ = ["StdlibLoggingAdapter"]
