"""Composition helpers wiring configuration to adapters.

Purpose
-------
Translate a :class:`LoggerConfig` into the concrete console backend, base
directory provider and file sink used by a logger instance. Backends are chosen
here once, never at call sites.
"""

from __future__ import annotations

from needletail_logger.adapters import (
    JournaldAdapter,
    RichConsoleAdapter,
    RotatingFileSink,
    StdlibLoggingAdapter,
    default_base_directory,
    fixed_base_directory,
)
from needletail_logger.application.ports import (
    BaseDirectoryProvider,
    ClockPort,
    ConsolePort,
    DiagnosticHook,
    RotationHook,
)
from needletail_logger.config import LoggerConfig


def create_console(config: LoggerConfig) -> ConsolePort:
    """Return the console backend named by ``config.backend``."""

    if config.backend == "journald":
        return JournaldAdapter(label=config.label)
    if config.backend == "logging":
        return StdlibLoggingAdapter(label=config.label)
    return RichConsoleAdapter(label=config.label)


def resolve_base_directory(config: LoggerConfig, override: BaseDirectoryProvider | None) -> BaseDirectoryProvider:
    """Prefer an injected provider, then the configured path, then the platform default."""

    if override is not None:
        return override
    if config.base_directory is not None:
        return fixed_base_directory(config.base_directory)
    return default_base_directory


def create_file_sink(
    config: LoggerConfig,
    *,
    base_directory: BaseDirectoryProvider,
    clock: ClockPort,
    diagnostic: DiagnosticHook,
    on_rotate: RotationHook | None = None,
) -> RotatingFileSink:
    return RotatingFileSink(
        label=config.label,
        max_lines=config.max_lines,
        base_directory=base_directory,
        clock=clock,
        diagnostic=diagnostic,
        on_rotate=on_rotate,
    )


__all__ = ["create_console", "create_file_sink", "resolve_base_directory"]
