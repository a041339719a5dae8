from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide_checkin(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, reason="checked in after shift start grace")
