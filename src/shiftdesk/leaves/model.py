from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request. Dates are date-only ``YYYY-MM-DD``."""

    request_id: str
    user_id: str
    username: str
    start_date: str
    end_date: str
    leave_type: LeaveType
    reason: str
    status: RequestStatus = RequestStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "user_id": self.user_id,
            "username": self.username,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "leave_type": self.leave_type.value,
            "reason": self.reason,
            "status": self.status.value,
        }
