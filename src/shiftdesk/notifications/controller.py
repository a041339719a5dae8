from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user_id, json_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="notification_inbox")
    @login_required
    @json_errors
    async def notification_inbox():
        items = await container.notification_service.list_inbox(current_user_id())
        return jsonify({"success": True, "notifications": [n.to_dict() for n in items]})

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="notification_unread_count")
    @login_required
    @json_errors
    async def notification_unread_count():
        count = await container.notification_service.unread_count(current_user_id())
        return jsonify({"success": True, "unread": count})

    @app.route("/api/notifications/read", methods=["POST"], endpoint="notification_mark_read")
    @login_required
    @json_errors
    async def notification_mark_read():
        data = request.get_json(silent=True) or {}
        ids = data.get("ids") or []
        try:
            ids = [int(i) for i in ids]
        except (TypeError, ValueError):
            raise ValidationError("ids must be a list of notification ids")
        changed = await container.notification_service.mark_read(current_user_id(), ids)
        return jsonify({"success": True, "updated": changed})
