"""Role capability table and reporting-chain routing rules.

Every permission check in the services goes through this module so the
role rules live in one place.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from .enums import Role
from .exceptions import AuthorizationError


class Capability(str, Enum):
    VIEW_ALL_ATTENDANCE = "attendance.view_all"
    EDIT_ATTENDANCE = "attendance.edit"
    DELETE_ATTENDANCE = "attendance.delete"
    DECIDE_LEAVE = "leave.decide"
    VIEW_ALL_LEAVES = "leave.view_all"
    VIEW_DEPARTMENT_LEAVES = "leave.view_department"
    VIEW_TEAM_LEAVES = "leave.view_team"


ROLE_CAPABILITIES: Mapping[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(
        {
            Capability.VIEW_ALL_ATTENDANCE,
            Capability.EDIT_ATTENDANCE,
            Capability.DELETE_ATTENDANCE,
            Capability.DECIDE_LEAVE,
            Capability.VIEW_ALL_LEAVES,
        }
    ),
    Role.MANAGER: frozenset(
        {
            Capability.VIEW_ALL_ATTENDANCE,
            Capability.DECIDE_LEAVE,
            Capability.VIEW_DEPARTMENT_LEAVES,
        }
    ),
    Role.HR: frozenset({Capability.DECIDE_LEAVE, Capability.VIEW_ALL_LEAVES}),
    Role.TEAM_LEAD: frozenset({Capability.VIEW_TEAM_LEAVES}),
    Role.STAFF: frozenset(),
}

# Which User attributes name the people to notify when a user of this role acts.
ESCALATION_FIELDS: Mapping[Role, tuple[str, ...]] = {
    Role.STAFF: ("team_lead_id", "manager_id"),
    Role.TEAM_LEAD: ("manager_id",),
    Role.MANAGER: (),
    Role.ADMIN: (),
    Role.HR: (),
}


def can(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(Role(role), frozenset())


def require(role: Role, capability: Capability, message: str = "You do not have permission") -> None:
    if not can(role, capability):
        raise AuthorizationError(message)
