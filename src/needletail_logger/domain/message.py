"""Lazily rendered log message value.

Purpose
-------
Let callers hand the logger an expensive-to-build message without paying for
it when the level filter discards the call.

Contents
--------
* :class:`LogMessage` - literal, template, or callable-backed message.
* :func:`coerce_message` - accept ``str`` or :class:`LogMessage`.
"""

from __future__ import annotations

from typing import Any, Callable

_UNRENDERED = object()


class LogMessage:
    """Opaque message rendered at most once.

    ``LogMessage("text")`` wraps a literal; ``LogMessage("x={}", 1)`` keeps a
    :meth:`str.format` template and its arguments until the first render;
    :meth:`lazy` wraps a zero-argument callable. The rendered value is cached,
    so repeated renders return the same string and never re-run the callable.

    Examples
    --------
    >>> LogMessage("user {} logged in", "ada").render()
    'user ada logged in'
    >>> calls = []
    >>> message = LogMessage.lazy(lambda: calls.append(1) or "built")
    >>> calls
    []
    >>> str(message), str(message), len(calls)
    ('built', 'built', 1)
    """

    __slots__ = ("_template", "_args", "_kwargs", "_factory", "_rendered")

    def __init__(self, template: str, *args: Any, **kwargs: Any) -> None:
        self._template = template
        self._args = args
        self._kwargs = kwargs
        self._factory: Callable[[], str] | None = None
        self._rendered: object = template if not args and not kwargs else _UNRENDERED

    @classmethod
    def lazy(cls, factory: Callable[[], str]) -> "LogMessage":
        """Build a message whose text is produced by ``factory`` on first render."""

        message = cls("")
        message._factory = factory
        message._rendered = _UNRENDERED
        return message

    @property
    def is_rendered(self) -> bool:
        return self._rendered is not _UNRENDERED

    def render(self) -> str:
        """Return the message text, rendering and caching it on first use."""

        if self._rendered is _UNRENDERED:
            if self._factory is not None:
                self._rendered = str(self._factory())
            else:
                self._rendered = self._template.format(*self._args, **self._kwargs)
        return self._rendered  # type: ignore[return-value]

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        if self._factory is not None and not self.is_rendered:
            return "LogMessage.lazy(...)"
        return f"LogMessage({self._template!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LogMessage):
            return self.render() == other.render()
        if isinstance(other, str):
            return self.render() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.render())


def coerce_message(message: str | LogMessage) -> LogMessage:
    """Wrap plain strings so the pipeline only deals with :class:`LogMessage`."""

    if isinstance(message, LogMessage):
        return message
    return LogMessage(str(message))


__all__ = ["LogMessage", "coerce_message"]
