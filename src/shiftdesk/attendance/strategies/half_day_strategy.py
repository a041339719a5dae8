from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Short session on check-out. Overrides any earlier status, LATE included."""

    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY, reason=f"session shorter than half day (was {current.value})")
