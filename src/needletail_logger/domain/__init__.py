"""Domain value objects used by the logging facade."""

from __future__ import annotations

from .levels import LogLevel, coerce_level
from .message import LogMessage, coerce_message
from .metadata import Metadata, MetadataKind, MetadataValue, coerce_metadata, render_metadata

__all__ = [
    "LogLevel",
    "LogMessage",
    "Metadata",
    "MetadataKind",
    "MetadataValue",
    "coerce_level",
    "coerce_message",
    "coerce_metadata",
    "render_metadata",
]
