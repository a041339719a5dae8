from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.ledger import AttendanceLedgerService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import get_timezone
from .core.constants import HALF_DAY_HOURS, LATE_GRACE_MINUTES
from .database.bootstrap import demo_users
from .database.connection import DatabaseConnection, DBConfig
from .database.memory import InMemoryStore
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .notifications.dispatcher import NotificationDispatcher
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository

BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    notifications_repo: NotificationRepository

    dispatcher: NotificationDispatcher
    attendance_service: AttendanceService
    ledger_service: AttendanceLedgerService
    leave_service: LeaveService
    notification_service: NotificationService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    notifications_repo: NotificationRepository,
    timezone: str = "UTC",
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    tz = get_timezone(timezone)
    dispatcher = NotificationDispatcher(notifications_repo)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        dispatcher,
        strategy_factory=AttendanceStrategyFactory(
            grace_minutes=LATE_GRACE_MINUTES,
            half_day_hours=HALF_DAY_HOURS,
        ),
        timezone=tz,
    )
    ledger_service = AttendanceLedgerService(attendance_repo, users_repo, timezone=tz)
    leave_service = LeaveService(leaves_repo, users_repo, dispatcher)
    notification_service = NotificationService(notifications_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        notifications_repo=notifications_repo,
        dispatcher=dispatcher,
        attendance_service=attendance_service,
        ledger_service=ledger_service,
        leave_service=leave_service,
        notification_service=notification_service,
    )


def build_memory_container(
    store: Optional[InMemoryStore] = None,
    *,
    timezone: str = "UTC",
    seed_demo: bool = False,
) -> Container:
    store = store or InMemoryStore()
    if seed_demo:
        for user in demo_users():
            store.users.add(user)
    return wire_services(
        users_repo=store.users,
        attendance_repo=store.attendance,
        leaves_repo=store.leaves,
        notifications_repo=store.notifications,
        timezone=timezone,
    )


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    timezone: str = "UTC",
    seed_demo: bool = False,
) -> Container:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {', '.join(BACKENDS)})")
    if backend == "memory":
        return build_memory_container(timezone=timezone, seed_demo=seed_demo)

    if not db_config:
        raise ValueError("DB_CONFIG is required for the mysql backend")
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        timezone=timezone,
        conn=conn,
    )
