"""Log level abstraction with a fixed, rank-based total order.

Purpose
-------
Offer a domain-specific representation of the seven severities accepted by the
logger, together with the icons and codes used when rendering messages.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* ``_ICON_TABLE`` / ``_CODE_TABLE`` constants mapping levels to glyphs and codes.

System Role
-----------
Used by the application layer for threshold checks and by the formatter and
adapters to present human-friendly icons.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import total_ordering


@total_ordering
class LogLevel(Enum):
    """Enumerated logging levels ordered by their integral rank."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    NOTICE = 3
    WARNING = 4
    ERROR = 5
    CRITICAL = 6

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.rank < other.rank

    @property
    def rank(self) -> int:
        """Return the position of the level in the severity order."""

        return self.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the glyph prefixed to formatted messages."""

        return _ICON_TABLE[self]

    @property
    def code(self) -> str:
        """Return the four-letter abbreviation used by compact renderers."""

        return _CODE_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` numeric level matching this level."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_rank(cls, rank: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose rank equals ``rank``."""
        try:
            return cls(rank)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level rank: {rank}") from exc


_ICON_TABLE = {
    LogLevel.TRACE: "🔍",
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.NOTICE: "📣",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.CRITICAL: "☠",
}
# Glyphs prefixed to formatted messages per level.

_CODE_TABLE = {
    LogLevel.TRACE: "TRCE",
    LogLevel.DEBUG: "DEBG",
    LogLevel.INFO: "INFO",
    LogLevel.NOTICE: "NOTE",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERRO",
    LogLevel.CRITICAL: "CRIT",
}

_PYTHON_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: 25,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


def coerce_level(level: str | LogLevel) -> LogLevel:
    """Normalise level inputs (string or enum) into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("warning") is LogLevel.WARNING
    True
    >>> coerce_level(LogLevel.TRACE) is LogLevel.TRACE
    True
    """

    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


__all__ = ["LogLevel", "coerce_level"]
