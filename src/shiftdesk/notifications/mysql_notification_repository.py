from __future__ import annotations

from typing import Callable, Iterable, Sequence

from ..common.datetime_utils import now_utc, to_canonical_datetime
from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, run_db
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable = now_utc):
        self._conn_factory = conn_factory
        self._clock = clock

    def _create(self, recipient_id: str, sender_name: str, message: str, type: NotificationType, is_read: bool) -> Notification:
        timestamp = to_canonical_datetime(self._clock())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(recipient_id, sender_name, message, type, is_read, timestamp)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (recipient_id, sender_name, message, type.value, bool(is_read), timestamp),
            )
            notification_id = int(cur.lastrowid)

        return Notification(
            notification_id=notification_id,
            recipient_id=recipient_id,
            sender_name=sender_name,
            message=message,
            type=type,
            is_read=bool(is_read),
            timestamp=timestamp,
        )

    def _list_for_recipient(self, recipient_id: str, limit: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, recipient_id, sender_name, message, type, is_read, timestamp
                FROM notifications
                WHERE recipient_id=%s
                ORDER BY timestamp DESC, id DESC
                LIMIT %s
                """,
                (recipient_id, int(limit)),
            )
            return [
                Notification(
                    notification_id=int(r["id"]),
                    recipient_id=str(r["recipient_id"]),
                    sender_name=r.get("sender_name") or "",
                    message=r.get("message") or "",
                    type=NotificationType(r.get("type") or NotificationType.SYSTEM.value),
                    is_read=bool(r.get("is_read")),
                    timestamp=to_canonical_datetime(r.get("timestamp")) or "",
                )
                for r in fetchall(cur)
            ]

    def _count_unread(self, recipient_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM notifications WHERE recipient_id=%s AND is_read=0", (recipient_id,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def _mark_read(self, recipient_id: str, ids: list[int]) -> int:
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE notifications SET is_read=1 WHERE recipient_id=%s AND is_read=0 AND id IN ({placeholders})",
                (recipient_id, *ids),
            )
            return int(cur.rowcount)

    async def create(
        self,
        *,
        recipient_id: str,
        sender_name: str,
        message: str,
        type: NotificationType,
        is_read: bool = False,
    ) -> Notification:
        return await run_db(self._create, str(recipient_id), sender_name, message, NotificationType(type), is_read)

    async def list_for_recipient(self, recipient_id: str, *, limit: int = 100) -> Sequence[Notification]:
        return await run_db(self._list_for_recipient, str(recipient_id), int(limit))

    async def count_unread(self, recipient_id: str) -> int:
        return await run_db(self._count_unread, str(recipient_id))

    async def mark_read(self, recipient_id: str, notification_ids: Iterable[int]) -> int:
        ids = [int(i) for i in notification_ids]
        if not ids:
            return 0
        return await run_db(self._mark_read, str(recipient_id), ids)
