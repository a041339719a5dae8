from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import LeaveRequest


class LeaveRepository(Protocol):
    async def get_leave_requests(self) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    async def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    async def put(self, request: LeaveRequest) -> None:
        raise NotImplementedError

    async def delete(self, request_id: str) -> bool:
        raise NotImplementedError
