from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, CheckOutStrategy, StatusDecision


class NormalStrategy(CheckInStrategy, CheckOutStrategy):
    """On-time check-in, check-out keeps the check-in status."""

    def decide_checkin(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
