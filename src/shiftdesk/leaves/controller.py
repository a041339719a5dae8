from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user_id, json_errors, login_required
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="leave_ledger")
    @login_required
    @json_errors
    async def leave_ledger():
        status = request.args.get("status")
        try:
            status_filter = RequestStatus(status.upper()) if status else None
        except ValueError:
            raise ValidationError(f"Unknown status: {status!r}")
        leaves = await container.leave_service.list_visible(current_user_id(), status=status_filter)
        return jsonify({"success": True, "leaves": [lv.to_dict() for lv in leaves]})

    @app.route("/api/leaves", methods=["POST"], endpoint="new_leave")
    @login_required
    @json_errors
    async def new_leave():
        data = request.get_json(silent=True) or {}
        leave = await container.leave_service.submit(
            user_id=current_user_id(),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            leave_type=data.get("leave_type") or "VACATION",
            reason=data.get("reason", ""),
        )
        return jsonify({"success": True, "leave": leave.to_dict()}), 201

    @app.route("/api/leaves/<request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    @json_errors
    async def approve_leave(request_id: str):
        leave = await container.leave_service.approve(approver_id=current_user_id(), request_id=request_id)
        return jsonify({"success": True, "leave": leave.to_dict()})

    @app.route("/api/leaves/<request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    @json_errors
    async def reject_leave(request_id: str):
        leave = await container.leave_service.reject(approver_id=current_user_id(), request_id=request_id)
        return jsonify({"success": True, "leave": leave.to_dict()})

    @app.route("/api/leaves/<request_id>", methods=["DELETE"], endpoint="withdraw_leave")
    @login_required
    @json_errors
    async def withdraw_leave(request_id: str):
        await container.leave_service.withdraw(owner_id=current_user_id(), request_id=request_id)
        return jsonify({"success": True})
