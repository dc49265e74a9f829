"""Recursive metadata values attached to log calls.

Purpose
-------
Represent structured key/value attachments as a small tagged union so adapters
can render or serialise them without guessing at arbitrary Python objects.

Contents
--------
* :class:`MetadataKind` - the four variants.
* :class:`MetadataValue` - immutable value with conversion helpers.
* :func:`coerce_metadata` - normalise caller mappings into :data:`Metadata`.

System Role
-----------
Passed untouched from the logger facade to the console backend. The file sink
never sees metadata.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MetadataKind(Enum):
    """Variants of :class:`MetadataValue`."""

    STRING = "string"
    STRINGIFIABLE = "stringifiable"
    DICTIONARY = "dictionary"
    ARRAY = "array"



def _enter(container: object, active: frozenset[int]) -> frozenset[int]:
    """Return ``active`` extended by ``container``; a repeat on the same path is a cycle."""

    marker = id(container)
    if marker in active:
        raise TypeError("metadata must not contain cycles")
    return active | {marker}


@dataclass(slots=True, frozen=True)
class MetadataValue:
    """Immutable metadata node.

    Attributes
    ----------
    kind:
        Which variant the node holds.
    value:
        ``str`` for STRING, the original object for STRINGIFIABLE, a
        ``tuple[tuple[str, MetadataValue], ...]`` for DICTIONARY and a
        ``tuple[MetadataValue, ...]`` for ARRAY. Containers are copied into
        tuples on construction so a value can never reference itself.
    """

    kind: MetadataKind
    value: Any

    @classmethod
    def string(cls, text: str) -> "MetadataValue":
        return cls(MetadataKind.STRING, str(text))

    @classmethod
    def stringifiable(cls, obj: object) -> "MetadataValue":
        return cls(MetadataKind.STRINGIFIABLE, obj)

    @classmethod
    def dictionary(cls, items: Mapping[str, Any], *, _active: frozenset[int] = frozenset()) -> "MetadataValue":
        active = _enter(items, _active)
        pairs = []
        for key, item in items.items():
            if not isinstance(key, str):
                raise TypeError(f"metadata keys must be strings, got {type(key).__name__}")
            pairs.append((key, cls.from_python(item, _active=active)))
        return cls(MetadataKind.DICTIONARY, tuple(pairs))

    @classmethod
    def array(cls, items: list[Any] | tuple[Any, ...], *, _active: frozenset[int] = frozenset()) -> "MetadataValue":
        active = _enter(items, _active)
        return cls(MetadataKind.ARRAY, tuple(cls.from_python(item, _active=active) for item in items))

    @classmethod
    def from_python(cls, obj: Any, *, _active: frozenset[int] = frozenset()) -> "MetadataValue":
        """Convert a plain Python value into a :class:`MetadataValue`.

        Examples
        --------
        >>> MetadataValue.from_python({"user": "ada", "ids": [1, 2]}).render()
        '[user: ada, ids: [1, 2]]'
        """

        if isinstance(obj, MetadataValue):
            return obj
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, Mapping):
            return cls.dictionary(obj, _active=_active)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj, _active=_active)
        return cls.stringifiable(obj)

    def render(self) -> str:
        """Return the human-readable form used by console backends."""

        if self.kind is MetadataKind.STRING:
            return self.value
        if self.kind is MetadataKind.STRINGIFIABLE:
            return str(self.value)
        if self.kind is MetadataKind.ARRAY:
            return "[" + ", ".join(item.render() for item in self.value) + "]"
        return "[" + ", ".join(f"{key}: {item.render()}" for key, item in self.value) + "]"

    def to_python(self) -> Any:
        """Return plain ``str``/``dict``/``list`` structures for serialisers."""

        if self.kind is MetadataKind.STRING:
            return self.value
        if self.kind is MetadataKind.STRINGIFIABLE:
            return str(self.value)
        if self.kind is MetadataKind.ARRAY:
            return [item.to_python() for item in self.value]
        return {key: item.to_python() for key, item in self.value}

    def __str__(self) -> str:
        return self.render()


Metadata = dict[str, MetadataValue]


def coerce_metadata(metadata: Mapping[str, Any] | None) -> Metadata | None:
    """Return a fresh :data:`Metadata` mapping, or ``None`` when nothing was passed."""

    if metadata is None:
        return None
    active = _enter(metadata, frozenset())
    result: Metadata = {}
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise TypeError(f"metadata keys must be strings, got {type(key).__name__}")
        result[key] = MetadataValue.from_python(value, _active=active)
    return result


def render_metadata(metadata: Mapping[str, MetadataValue] | None) -> str:
    """Render metadata as ``key=value`` pairs sorted by key."""

    if not metadata:
        return ""
    return " ".join(f"{key}={value.render()}" for key, value in sorted(metadata.items()))


__all__ = [
    "Metadata",
    "MetadataKind",
    "MetadataValue",
    "coerce_metadata",
    "render_metadata",
]
