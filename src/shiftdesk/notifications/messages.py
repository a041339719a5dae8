"""Message templates for notifications."""

from __future__ import annotations

from datetime import datetime

from ..core.enums import RequestStatus
from ..leaves.model import LeaveRequest
from ..users.model import User


def attendance_message(user: User, action: str, at: datetime) -> str:
    return f"{user.display_name} {action} at {at.strftime('%H:%M')} on {at.strftime('%Y-%m-%d')}"


def leave_request_message(user: User, leave: LeaveRequest) -> str:
    return (
        f"{user.display_name} REQUESTED {leave.leave_type.value} LEAVE "
        f"from {leave.start_date} to {leave.end_date}"
    )


def leave_decision_message(leave: LeaveRequest, decision: RequestStatus) -> str:
    return (
        f"Your {leave.leave_type.value} leave request from {leave.start_date} "
        f"to {leave.end_date} has been {decision.value}"
    )
