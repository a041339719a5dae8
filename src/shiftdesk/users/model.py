from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a directory user.

    Owned by the external user directory; read-only here. ``team_lead_id`` and
    ``manager_id`` form a two-level reporting forest maintained by the caller.
    """

    user_id: str
    username: str
    full_name: str
    role: Role
    department: str = "Unassigned"
    shift_start_time: Optional[str] = None
    team_lead_id: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
