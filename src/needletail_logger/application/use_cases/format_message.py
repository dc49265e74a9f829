"""Turn a level and raw message into the display text.

Purpose
-------
Keep formatting deterministic and free of I/O so it can be reasoned about and
tested in isolation from the backends.

Contents
--------
* :func:`paginate` - greedy whitespace-token line packing.
* :func:`format_message` - icon selection, case transforms, debug dividers.
* :class:`FormattedMessage` - the ``(icon, body)`` result.
"""

from __future__ import annotations

from dataclasses import dataclass

from needletail_logger.domain.levels import LogLevel

DEBUG_DIVIDER = "-" * 20

_UPPERCASE_LEVELS = frozenset({LogLevel.ERROR, LogLevel.CRITICAL})


@dataclass(slots=True, frozen=True)
class FormattedMessage:
    """Formatter output: the icon prefix (may be empty) and the paginated body."""

    icon: str
    body: str

    @property
    def text(self) -> str:
        """Return the line handed to the backends and the file sink."""

        if not self.icon:
            return self.body
        return f"{self.icon} {self.body}"


def paginate(text: str, width: int) -> str:
    """Pack whitespace-separated tokens into lines no wider than ``width``.

    A token that is longer than ``width`` on its own occupies a line by itself
    and is never split.

    Examples
    --------
    >>> paginate("the quick brown fox", 9)
    'the quick\\nbrown fox'
    >>> paginate("a supercalifragilistic b", 5)
    'a\\nsupercalifragilistic\\nb'
    >>> paginate("   ", 10)
    ''
    """

    if width <= 0:
        raise ValueError("width must be positive")
    lines: list[str] = []
    current = ""
    for token in text.split():
        if not current:
            current = token
        elif len(current) + 1 + len(token) <= width:
            current = f"{current} {token}"
        else:
            lines.append(current)
            current = token
    if current:
        lines.append(current)
    return "\n".join(lines)


def format_message(
    level: LogLevel,
    raw: str,
    *,
    max_line_width: int,
    display_icons: bool = True,
) -> FormattedMessage:
    """Return the icon and body for ``raw`` logged at ``level``.

    ERROR and CRITICAL bodies are upper-cased before pagination so the width
    bound holds for the text that is actually written. DEBUG bodies are wrapped
    in divider lines. Whether DEBUG is emitted at all is decided by the caller.

    Examples
    --------
    >>> format_message(LogLevel.ERROR, "disk full", max_line_width=80).text
    '✖ DISK FULL'
    >>> format_message(LogLevel.INFO, "ready", max_line_width=80, display_icons=False).text
    'ready'
    """

    source = raw.upper() if level in _UPPERCASE_LEVELS else raw
    body = paginate(source, max_line_width)
    if level is LogLevel.DEBUG:
        body = f"{DEBUG_DIVIDER}\n{body}\n{DEBUG_DIVIDER}"
    icon = level.icon if display_icons else ""
    return FormattedMessage(icon=icon, body=body)


__all__ = ["DEBUG_DIVIDER", "FormattedMessage", "format_message", "paginate"]
