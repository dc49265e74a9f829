"""Journald adapter that emits uppercase structured fields.

Purpose
-------
Send formatted messages to systemd-journald so Linux services land in the
system log instead of a terminal.

Contents
--------
* :data:`_LEVEL_MAP` - syslog priority mapping.
* :class:`JournaldAdapter` - :class:`ConsolePort` implementation for the
  ``journald`` backend.

System Role
-----------
Transforms a level, text and metadata into a journald field dictionary and
invokes ``systemd.journal.send`` (or a supplied sender).
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from needletail_logger.application.ports.console import ConsolePort
from needletail_logger.domain.levels import LogLevel
from needletail_logger.domain.metadata import MetadataValue

Sender = Callable[..., None]

#: Map :class:`LogLevel` to syslog numeric priorities.
_LEVEL_MAP = {
    LogLevel.TRACE: 7,
    LogLevel.DEBUG: 7,
    LogLevel.INFO: 6,
    LogLevel.NOTICE: 5,
    LogLevel.WARNING: 4,
    LogLevel.ERROR: 3,
    LogLevel.CRITICAL: 2,
}


def _default_sender(**fields: Any) -> None:  # pragma: no cover - depends on systemd
    """Proxy to :func:`systemd.journal.send`, raising if unavailable."""
    try:
        from systemd import journal
    except ImportError as exc:  # pragma: no cover - executed only when systemd missing
        raise RuntimeError("systemd.journal is not available") from exc
    journal.send(**fields)


class JournaldAdapter(ConsolePort):
    """Emit formatted messages via ``systemd.journal.send``."""

    def __init__(self, *, label: str, sender: Sender | None = None, identifier_field: str = "SYSLOG_IDENTIFIER") -> None:
        self._label = label
        self._sender = sender or _default_sender
        self._identifier_field = identifier_field.upper()

    def emit(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> None:
        """Send the message to journald using the configured sender."""
        self._sender(**self._build_fields(level, text, metadata))

    def _build_fields(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> dict[str, Any]:
        """Construct a journald field dictionary.

        Examples
        --------
        >>> adapter = JournaldAdapter(label='svc', sender=lambda **fields: None)
        >>> fields = adapter._build_fields(LogLevel.NOTICE, 'msg', {'foo': MetadataValue.string('bar')})
        >>> fields['MESSAGE'], fields['PRIORITY'], fields['SYSLOG_IDENTIFIER']
        ('msg', 5, 'svc')
        >>> fields['FOO']
        'bar'
        """
        fields: dict[str, Any] = {
            "MESSAGE": text,
            "PRIORITY": _LEVEL_MAP[level],
            "LOGGER_LEVEL": level.severity.upper(),
            self._identifier_field: self._label,
        }
        for key, value in (metadata or {}).items():
            fields[key.upper()] = value.render()
        return fields


__all__ = ["JournaldAdapter"]
