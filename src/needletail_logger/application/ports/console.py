"""Console port describing the emission contract for formatted messages.

Purpose
-------
Define the abstraction for adapters that deliver formatted log text to a
terminal, the system journal, or another logging framework, letting the
facade depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` - runtime-checkable protocol with a single ``emit``
  method.

System Role
-----------
The facade forwards every accepted call here together with the caller's
metadata. Adapters are chosen once at construction time.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from needletail_logger.domain.levels import LogLevel
from needletail_logger.domain.metadata import MetadataValue


@runtime_checkable
class ConsolePort(Protocol):
    """Deliver a formatted message to a console or system backend."""

    def emit(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> None:
        """Render ``text`` at ``level`` with optional structured ``metadata``."""


__all__ = ["ConsolePort"]
