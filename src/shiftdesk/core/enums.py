from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission checks and notification routing."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    TEAM_LEAD = "TEAM_LEAD"
    HR = "HR"
    STAFF = "STAFF"


class AttendanceStatus(str, Enum):
    """Attendance status as stored on the wire."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    HALF_DAY = "HALF-DAY"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON-LEAVE"


class LeaveType(str, Enum):
    VACATION = "VACATION"
    SICK = "SICK"
    CASUAL = "CASUAL"
    OTHER = "OTHER"


class RequestStatus(str, Enum):
    """Leave request approval states."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class NotificationType(str, Enum):
    ATTENDANCE = "ATTENDANCE"
    LEAVE = "LEAVE"
    REQUEST = "REQUEST"
    SYSTEM = "SYSTEM"


class SessionState(str, Enum):
    """State of a user's current attendance session (dashboard card)."""

    NO_SESSION = "NO_SESSION"
    OPEN = "OPEN"
    CLOSED = "CLOSED"
