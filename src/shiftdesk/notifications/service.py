from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..core.constants import DEFAULT_INBOX_LIMIT
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Use case: the notification inbox of one user."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    async def list_inbox(self, user_id: str, *, limit: int = DEFAULT_INBOX_LIMIT) -> Sequence[Notification]:
        """Newest first. Viewing the inbox marks the unread items read.

        The returned items keep the read flags they had before viewing.
        """
        items = await self._notifications.list_for_recipient(str(user_id), limit=limit)
        unread_ids = [n.notification_id for n in items if not n.is_read]
        if unread_ids:
            await self._notifications.mark_read(str(user_id), unread_ids)
        return items

    async def unread_count(self, user_id: str) -> int:
        return await self._notifications.count_unread(str(user_id))

    async def mark_read(self, user_id: str, notification_ids: Iterable[int]) -> int:
        """Mark the given notifications read, ignoring ids not addressed to ``user_id``."""
        wanted = sorted({int(i) for i in notification_ids})
        if not wanted:
            return 0
        return await self._notifications.mark_read(str(user_id), wanted)
