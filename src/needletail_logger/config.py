"""Logger configuration and environment overrides.

Purpose
-------
Hold the construction-time settings of a logger in one immutable value and
translate ``LOG_*`` environment variables into it.

Contents
--------
* :class:`LoggerConfig` - validated, frozen configuration.
* :func:`load_config` - keyword arguments merged with environment overrides.
* :data:`ENV_VARS` - the recognised environment variable names.

System Role
-----------
Consumed by :class:`needletail_logger.NeedleTailLogger` and the CLI. Only the
threshold level and the write-to-file flag change after construction, and
they change by swapping in a new :class:`LoggerConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from needletail_logger.domain.levels import LogLevel, coerce_level

DEFAULT_LABEL = "NeedleTailLogging"
DEFAULT_MAX_LINES = 1000
DEFAULT_MAX_LINE_WIDTH = 80
BACKENDS: tuple[str, ...] = ("rich", "journald", "logging")

ENV_VARS: dict[str, str] = {
    "label": "LOG_LABEL",
    "level": "LOG_LEVEL",
    "max_lines": "LOG_MAX_LINES",
    "max_line_width": "LOG_MAX_LINE_WIDTH",
    "write_to_file": "LOG_WRITE_TO_FILE",
    "debug_enabled": "LOG_DEBUG",
    "backend": "LOG_BACKEND",
    "base_directory": "LOG_DIRECTORY",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True, frozen=True)
class LoggerConfig:
    """Settings of one logger instance.

    Attributes
    ----------
    label:
        Logger name; also names the log directory below the base directory.
    level:
        Inclusive severity threshold.
    max_lines:
        Records per file before the next write rotates.
    max_line_width:
        Pagination width for formatted message bodies.
    write_to_file:
        Whether accepted calls are also written to the file sink.
    debug_enabled:
        Whether DEBUG calls are emitted at all. Defaults to ``__debug__`` so
        ``python -O`` silences them.
    backend:
        Console backend selected at construction (``rich``, ``journald`` or
        ``logging``).
    base_directory:
        Writable base directory override; ``None`` uses the platform default.
    """

    label: str = DEFAULT_LABEL
    level: LogLevel = LogLevel.DEBUG
    max_lines: int = DEFAULT_MAX_LINES
    max_line_width: int = DEFAULT_MAX_LINE_WIDTH
    write_to_file: bool = False
    debug_enabled: bool = __debug__
    backend: str = "rich"
    base_directory: Path | None = None

    def __post_init__(self) -> None:
        if not self.label.strip():
            raise ValueError("label must not be empty")
        object.__setattr__(self, "level", coerce_level(self.level))
        if self.max_lines <= 0:
            raise ValueError("max_lines must be positive")
        if self.max_line_width <= 0:
            raise ValueError("max_line_width must be positive")
        backend = self.backend.strip().lower()
        if backend not in BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(BACKENDS)}; got {self.backend!r}")
        object.__setattr__(self, "backend", backend)
        if self.base_directory is not None:
            object.__setattr__(self, "base_directory", Path(self.base_directory).expanduser())

    def with_level(self, level: str | LogLevel) -> "LoggerConfig":
        return replace(self, level=coerce_level(level))

    def with_write_to_file(self, enabled: bool) -> "LoggerConfig":
        return replace(self, write_to_file=bool(enabled))


def parse_bool(name: str, value: str) -> bool:
    """Interpret an environment flag.

    Examples
    --------
    >>> parse_bool("LOG_DEBUG", "Yes")
    True
    >>> parse_bool("LOG_DEBUG", "off")
    False
    """

    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag (1/0, true/false, yes/no, on/off); got {value!r}")


def _parse_positive_int(name: str, value: str) -> int:
    try:
        number = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer; got {value!r}") from exc
    if number <= 0:
        raise ValueError(f"{name} must be positive")
    return number


def _environment_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field_name, env_name in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        if field_name in ("max_lines", "max_line_width"):
            overrides[field_name] = _parse_positive_int(env_name, raw)
        elif field_name in ("write_to_file", "debug_enabled"):
            overrides[field_name] = parse_bool(env_name, raw)
        elif field_name == "level":
            overrides[field_name] = LogLevel.from_name(raw)
        elif field_name == "base_directory":
            overrides[field_name] = Path(raw)
        else:
            overrides[field_name] = raw.strip()
    return overrides


def load_config(*, environ: Mapping[str, str] | None = None, **values: Any) -> LoggerConfig:
    """Build a :class:`LoggerConfig` from keyword arguments and ``LOG_*`` variables.

    Environment variables take precedence over keyword arguments so operators
    can adjust a deployed service without code changes. Keyword arguments that
    are ``None`` fall back to the defaults.

    Examples
    --------
    >>> config = load_config(environ={"LOG_LEVEL": "error"}, level="info", max_lines=5)
    >>> config.level.name, config.max_lines
    ('ERROR', 5)
    """

    unknown = set(values) - set(ENV_VARS)
    if unknown:
        raise TypeError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
    merged = {key: value for key, value in values.items() if value is not None}
    merged.update(_environment_overrides(os.environ if environ is None else environ))
    return LoggerConfig(**merged)


__all__ = [
    "BACKENDS",
    "DEFAULT_LABEL",
    "DEFAULT_MAX_LINES",
    "DEFAULT_MAX_LINE_WIDTH",
    "ENV_VARS",
    "LoggerConfig",
    "load_config",
    "parse_bool",
]
