from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytz

from shiftdesk.core.enums import NotificationType
from shiftdesk.database.memory import InMemoryNotificationRepository
from shiftdesk.notifications.service import NotificationService


class SteppingClock:
    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        self._now += timedelta(minutes=1)
        return self._now


def _repo_with(messages, recipient="TL1"):
    repo = InMemoryNotificationRepository(clock=SteppingClock(datetime(2025, 1, 6, 9, 0, tzinfo=pytz.UTC)))
    for message in messages:
        asyncio.run(
            repo.create(recipient_id=recipient, sender_name="Sam Staff", message=message, type=NotificationType.ATTENDANCE)
        )
    return repo


def test_inbox_is_newest_first_and_marks_items_read():
    repo = _repo_with(["first", "second", "third"])
    service = NotificationService(repo)

    inbox = asyncio.run(service.list_inbox("TL1"))

    assert [n.message for n in inbox] == ["third", "second", "first"]
    assert all(not n.is_read for n in inbox)
    assert asyncio.run(service.unread_count("TL1")) == 0


def test_inbox_respects_limit():
    repo = _repo_with(["a", "b", "c"])
    inbox = asyncio.run(NotificationService(repo).list_inbox("TL1", limit=2))
    assert [n.message for n in inbox] == ["c", "b"]


def test_unread_count_is_per_recipient():
    repo = _repo_with(["a", "b"])
    asyncio.run(repo.create(recipient_id="M1", sender_name="x", message="c", type=NotificationType.SYSTEM))
    service = NotificationService(repo)

    assert asyncio.run(service.unread_count("TL1")) == 2
    assert asyncio.run(service.unread_count("M1")) == 1


def test_mark_read_only_touches_own_notifications():
    repo = _repo_with(["a"])
    other = asyncio.run(repo.create(recipient_id="M1", sender_name="x", message="b", type=NotificationType.SYSTEM))
    service = NotificationService(repo)
    own_id = asyncio.run(service.list_inbox("TL1"))[0].notification_id

    assert asyncio.run(service.mark_read("TL1", [other.notification_id])) == 0
    assert asyncio.run(service.unread_count("M1")) == 1
    assert asyncio.run(service.mark_read("TL1", [own_id])) == 0
    assert asyncio.run(service.mark_read("M1", [other.notification_id])) == 1
    assert asyncio.run(service.mark_read("M1", [])) == 0


def test_unread_count_is_not_capped_by_inbox_size():
    repo = _repo_with([f"n{i}" for i in range(150)], recipient="M1")
    service = NotificationService(repo)

    assert asyncio.run(service.unread_count("M1")) == 150

    asyncio.run(service.list_inbox("M1"))
    assert asyncio.run(service.unread_count("M1")) == 50


def test_mark_read_reaches_notifications_older_than_inbox_page():
    repo = _repo_with([f"n{i}" for i in range(150)], recipient="M1")
    service = NotificationService(repo)
    oldest = min(n.notification_id for n in repo.all())

    assert asyncio.run(service.mark_read("M1", [oldest])) == 1
    assert asyncio.run(service.unread_count("M1")) == 149
    assert asyncio.run(service.mark_read("TL1", [oldest + 1])) == 0
