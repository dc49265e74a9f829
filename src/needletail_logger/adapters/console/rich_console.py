"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Deliver formatted log text to an interactive terminal with per-level styles.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleAdapter` - adapter selected by the ``rich`` backend.

System Role
-----------
Primary human-facing sink and the destination of storage fault reports. Text
arrives already paginated, so Rich's own wrapping and markup are disabled.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Mapping, MutableMapping

from rich.console import Console

from needletail_logger.application.ports.console import ConsolePort
from needletail_logger.domain.levels import LogLevel
from needletail_logger.domain.metadata import MetadataValue, render_metadata

#: Default Rich styles keyed by :class:`LogLevel` severity.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "dim cyan",
    LogLevel.INFO: "cyan",
    LogLevel.NOTICE: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold red",
}


class RichConsoleAdapter(ConsolePort):
    """Render formatted messages using Rich with optional style overrides."""

    def __init__(
        self,
        *,
        label: str = "",
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
        timestamp: Callable[[], datetime] | None = None,
    ) -> None:
        """Configure the console adapter with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._label = label
        self._no_color = no_color
        self._timestamp = timestamp or (lambda: datetime.now(timezone.utc))
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def emit(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> None:
        """Print ``text`` with the style configured for ``level``.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(label='svc', console=console)
        >>> adapter.emit(LogLevel.INFO, 'ready', None)
        >>> 'ready' in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(level, "")
        line = self._format_line(level, text, metadata)
        self._console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)

    def _format_line(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> str:
        pairs = render_metadata(metadata)
        suffix = f" {pairs}" if pairs else ""
        label = f" {self._label}" if self._label else ""
        return f"{self._timestamp().isoformat()} {level.code}{label}: {text}{suffix}"


__all__ = ["RichConsoleAdapter"]
