from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import minutes_since_midnight
from ..common.validators import parse_shift_start
from ..core.constants import HALF_DAY_HOURS, LATE_GRACE_MINUTES
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Both thresholds are strict: exactly shift start + grace is on time, and
    exactly ``half_day_hours`` is a full session.
    """

    grace_minutes: int = LATE_GRACE_MINUTES
    half_day_hours: float = HALF_DAY_HOURS

    def for_checkin(self, *, wall_now: datetime, shift_start: Optional[str]) -> CheckInStrategy:
        hours, minutes = parse_shift_start(shift_start)
        shift_minutes = hours * 60 + minutes
        if minutes_since_midnight(wall_now) > shift_minutes + self.grace_minutes:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, duration_hours: float) -> CheckOutStrategy:
        if duration_hours < self.half_day_hours:
            return HalfDayStrategy()
        return NormalStrategy()
