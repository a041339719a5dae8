"""Hierarchy notification fan-out.

Recipients are resolved from the acting user's role (see
``core.policy.ESCALATION_FIELDS``) and written concurrently. Each recipient
succeeds or fails on its own; failures are logged and reported, never raised,
so a committed attendance or leave record is never undone by messaging.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from ..core.enums import NotificationType, Role
from ..core.exceptions import NotificationDispatchFailure
from ..core.policy import ESCALATION_FIELDS
from ..users.model import User
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class HierarchyAction(str, Enum):
    CHECKED_IN = "CHECKED IN"
    CHECKED_OUT = "CHECKED OUT"


@dataclass(frozen=True)
class DispatchReport:
    delivered: tuple[str, ...] = ()
    failures: tuple[NotificationDispatchFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def recipients(self) -> tuple[str, ...]:
        return self.delivered + tuple(f.recipient_id for f in self.failures)


def resolve_recipients(user: User) -> list[str]:
    """Reporting-chain recipients for ``user``, in table order, without duplicates."""
    recipients: list[str] = []
    for field in ESCALATION_FIELDS.get(Role(user.role), ()):
        recipient_id = getattr(user, field, None)
        if recipient_id and recipient_id not in recipients:
            recipients.append(str(recipient_id))
    return recipients


class NotificationDispatcher:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    async def notify_hierarchy(
        self,
        acting_user: User,
        *,
        message: str,
        type: NotificationType,
    ) -> DispatchReport:
        recipients = resolve_recipients(acting_user)
        if not recipients:
            logger.debug("no escalation recipients for %s (%s)", acting_user.user_id, acting_user.role.value)
            return DispatchReport()
        return await self._send_all(recipients, sender_name=acting_user.display_name, message=message, type=type)

    async def notify_user(
        self,
        recipient_id: str,
        *,
        sender_name: str,
        message: str,
        type: NotificationType,
    ) -> DispatchReport:
        """Single direct notification (e.g. a leave decision back to the requester)."""
        return await self._send_all([recipient_id], sender_name=sender_name, message=message, type=type)

    async def _send_all(
        self,
        recipients: Sequence[str],
        *,
        sender_name: str,
        message: str,
        type: NotificationType,
    ) -> DispatchReport:
        results = await asyncio.gather(
            *(
                self._notifications.create(
                    recipient_id=recipient_id,
                    sender_name=sender_name,
                    message=message,
                    type=type,
                    is_read=False,
                )
                for recipient_id in recipients
            ),
            return_exceptions=True,
        )
        return _settle(recipients, results)


def _settle(recipients: Iterable[str], results: Iterable[object]) -> DispatchReport:
    delivered: list[str] = []
    failures: list[NotificationDispatchFailure] = []
    for recipient_id, result in zip(recipients, results):
        if isinstance(result, BaseException):
            failure = NotificationDispatchFailure(recipient_id, result)
            logger.warning("%s", failure)
            failures.append(failure)
        else:
            delivered.append(recipient_id)
    return DispatchReport(delivered=tuple(delivered), failures=tuple(failures))
