from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user_id, json_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_ledger")
    @login_required
    @json_errors
    async def attendance_ledger():
        rows = await container.ledger_service.rows(
            current_user_id(),
            user_id=request.args.get("user_id"),
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
        )
        return jsonify({"success": True, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/current", methods=["GET"], endpoint="attendance_current")
    @login_required
    @json_errors
    async def attendance_current():
        current = await container.attendance_service.get_current_session(current_user_id())
        return jsonify({"success": True, **current.to_dict()})

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    @json_errors
    async def checkin():
        record = await container.attendance_service.check_in(current_user_id())
        return jsonify({"success": True, "message": "Checked in", "record": record.to_dict()}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    @json_errors
    async def checkout():
        record = await container.attendance_service.check_out(current_user_id())
        return jsonify({"success": True, "message": "Checked out", "record": record.to_dict()})

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="attendance_edit")
    @login_required
    @json_errors
    async def attendance_edit(attendance_id: str):
        changes = request.get_json(silent=True) or {}
        record = await container.attendance_service.manual_edit(
            actor_id=current_user_id(),
            attendance_id=attendance_id,
            changes=changes,
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/attendance/<attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    @json_errors
    async def attendance_delete(attendance_id: str):
        await container.attendance_service.delete(actor_id=current_user_id(), attendance_id=attendance_id)
        return jsonify({"success": True})
