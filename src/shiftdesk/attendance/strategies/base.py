from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    reason: Optional[str] = None


class CheckInStrategy(ABC):
    """Strategy Pattern: decide the status a new session opens with."""

    @abstractmethod
    def decide_checkin(self) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: decide the status a session closes with."""

    @abstractmethod
    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        raise NotImplementedError
