from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    """Messaging port: notifications addressed to a recipient id."""

    async def create(
        self,
        *,
        recipient_id: str,
        sender_name: str,
        message: str,
        type: NotificationType,
        is_read: bool = False,
    ) -> Notification:
        raise NotImplementedError

    async def list_for_recipient(self, recipient_id: str, *, limit: int = 100) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    async def count_unread(self, recipient_id: str) -> int:
        raise NotImplementedError

    async def mark_read(self, recipient_id: str, notification_ids: Iterable[int]) -> int:
        """Mark unread notifications of ``recipient_id`` read; other ids are ignored."""

        raise NotImplementedError
