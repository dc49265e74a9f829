"""System clock adapter implementing :class:`ClockPort`."""

from __future__ import annotations

from datetime import datetime, timezone

from needletail_logger.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Return timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]
