from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    recipient_id: str
    sender_name: str
    message: str
    type: NotificationType
    is_read: bool
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "recipient_id": self.recipient_id,
            "sender_name": self.sender_name,
            "message": self.message,
            "type": self.type.value,
            "is_read": self.is_read,
            "timestamp": self.timestamp,
        }
