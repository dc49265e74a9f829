from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from needletail_logger import NeedleTailLogger
from needletail_logger.domain.levels import LogLevel
from needletail_logger.domain.metadata import MetadataValue


class RecordingConsole:
    """Console backend double capturing every emission."""

    def __init__(self) -> None:
        self.records: list[tuple[LogLevel, str, Mapping[str, MetadataValue] | None]] = []

    def emit(self, level: LogLevel, text: str, metadata: Mapping[str, MetadataValue] | None) -> None:
        self.records.append((level, text, metadata))

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.records]

    def levels(self) -> list[LogLevel]:
        return [level for level, _, _ in self.records]


class SteppingClock:
    """Clock returning a fixed instant, optionally advancing per call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(0)) -> None:
        self._current = start
        self._step = step
        self.calls = 0

    def now(self) -> datetime:
        value = self._current
        self._current = self._current + self._step
        self.calls += 1
        return value


FIXED_INSTANT = datetime(2026, 10, 17, 8, 30, 5, tzinfo=timezone.utc)


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200)


@pytest.fixture
def recording_console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def fixed_clock() -> SteppingClock:
    return SteppingClock(FIXED_INSTANT)


@pytest.fixture
def stepping_clock() -> SteppingClock:
    return SteppingClock(FIXED_INSTANT, step=timedelta(seconds=1))


@pytest.fixture
def make_logger(tmp_path: Path, recording_console: RecordingConsole, fixed_clock: SteppingClock) -> Callable[..., NeedleTailLogger]:
    """Build a logger writing below ``tmp_path`` and emitting into ``recording_console``."""

    def factory(**settings: Any) -> NeedleTailLogger:
        settings.setdefault("label", "tests")
        settings.setdefault("debug_enabled", True)
        console = settings.pop("console", recording_console)
        clock = settings.pop("clock", fixed_clock)
        return NeedleTailLogger(console=console, clock=clock, directory_provider=lambda: tmp_path, **settings)

    return factory


def read_records(path: Path) -> list[str]:
    """Return the lines of ``path`` without the rotation marker."""

    from needletail_logger.adapters.files.rotating import ROTATION_MARKER_PREFIX

    return [line for line in path.read_text(encoding="utf-8").splitlines() if not line.startswith(ROTATION_MARKER_PREFIX)]


@pytest.fixture
def records_of() -> Callable[[Path], list[str]]:
    return read_records
