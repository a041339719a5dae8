from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_lenient, to_date_only
from ..common.validators import require_date, require_non_empty
from ..core.constants import LEAVE_ID_PREFIX
from ..core.enums import LeaveType, NotificationType, RequestStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.policy import Capability, can, require
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.messages import leave_decision_message, leave_request_message
from ..users.model import User
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def filter_visible(
    requests: Iterable[LeaveRequest],
    viewer: User,
    users_by_id: Mapping[str, User],
) -> list[LeaveRequest]:
    """Role-scoped leave visibility.

    ADMIN/HR see everything, MANAGER sees their department, TEAM_LEAD sees
    their direct reports; everybody always sees their own requests.
    """
    if can(viewer.role, Capability.VIEW_ALL_LEAVES):
        return list(requests)

    def visible(req: LeaveRequest) -> bool:
        if req.user_id == viewer.user_id:
            return True
        owner = users_by_id.get(req.user_id)
        if owner is None:
            return False
        if can(viewer.role, Capability.VIEW_DEPARTMENT_LEAVES):
            return owner.department == viewer.department
        if can(viewer.role, Capability.VIEW_TEAM_LEAVES):
            return owner.team_lead_id == viewer.user_id
        return False

    return [r for r in requests if visible(r)]


class LeaveService:
    """Leave workflow: PENDING -> APPROVED | REJECTED, or withdrawn while PENDING."""

    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        dispatcher: NotificationDispatcher,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._leaves = leaves
        self._users = users
        self._dispatcher = dispatcher
        self._clock = clock

    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(str(user_id))
        if not user:
            raise ValidationError("User does not exist")
        return user

    async def _require_request(self, request_id: str) -> LeaveRequest:
        req = await self._leaves.get_by_id(str(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        return req

    async def submit(
        self,
        *,
        user_id: str,
        start_date: str,
        end_date: str,
        leave_type: str,
        reason: str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        owner = await self._require_user(user_id)

        start = require_date(to_date_only(start_date), "Start date")
        end = require_date(to_date_only(end_date), "End date")
        if end < start:
            raise ValidationError("End date must be on or after start date")
        try:
            kind = LeaveType(str(leave_type or "").upper())
        except ValueError:
            raise ValidationError(f"Unknown leave type: {leave_type!r}")
        reason = require_non_empty(reason, "Reason")

        created_at = parse_lenient(now or self._clock())
        request = LeaveRequest(
            request_id=f"{LEAVE_ID_PREFIX}-{owner.user_id}-{int(created_at.timestamp() * 1000)}",
            user_id=owner.user_id,
            username=owner.username,
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            leave_type=kind,
            reason=reason,
            status=RequestStatus.PENDING,
        )
        await self._leaves.put(request)
        logger.info("leave %s submitted by %s", request.request_id, owner.user_id)

        await self._dispatcher.notify_hierarchy(
            owner,
            message=leave_request_message(owner, request),
            type=NotificationType.LEAVE,
        )
        return request

    async def decide(self, *, approver_id: str, request_id: str, decision: RequestStatus) -> LeaveRequest:
        decision = RequestStatus(decision)
        if decision == RequestStatus.PENDING:
            raise ValidationError("A decision must be APPROVED or REJECTED")

        approver = await self._require_user(approver_id)
        req = await self._require_request(request_id)

        if approver.user_id == req.user_id:
            raise AuthorizationError("You cannot decide your own leave request")
        require(approver.role, Capability.DECIDE_LEAVE, "You do not have permission to decide leave requests")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        decided = replace(req, status=decision)
        await self._leaves.put(decided)
        logger.info("leave %s %s by %s", decided.request_id, decision.value, approver.user_id)

        await self._dispatcher.notify_user(
            decided.user_id,
            sender_name=approver.display_name,
            message=leave_decision_message(decided, decision),
            type=NotificationType.LEAVE,
        )
        return decided

    async def approve(self, *, approver_id: str, request_id: str) -> LeaveRequest:
        return await self.decide(approver_id=approver_id, request_id=request_id, decision=RequestStatus.APPROVED)

    async def reject(self, *, approver_id: str, request_id: str) -> LeaveRequest:
        return await self.decide(approver_id=approver_id, request_id=request_id, decision=RequestStatus.REJECTED)

    async def withdraw(self, *, owner_id: str, request_id: str) -> None:
        req = await self._require_request(request_id)
        if req.user_id != str(owner_id):
            raise AuthorizationError("Only the requester can withdraw a leave request")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Only pending leave requests can be withdrawn")

        if not await self._leaves.delete(req.request_id):
            raise ValidationError("Leave request not found")
        logger.info("leave %s withdrawn by %s", req.request_id, owner_id)

    async def list_visible(self, viewer_id: str, *, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        viewer = await self._require_user(viewer_id)
        users_by_id = {u.user_id: u for u in await self._users.list_all()}

        requests = filter_visible(await self._leaves.get_leave_requests(), viewer, users_by_id)
        if status is not None:
            requests = [r for r in requests if r.status == RequestStatus(status)]
        return sorted(requests, key=lambda r: (r.start_date, r.request_id), reverse=True)
