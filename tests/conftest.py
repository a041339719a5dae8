from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from shiftdesk.container import build_memory_container
from shiftdesk.core.enums import Role
from shiftdesk.database.memory import InMemoryStore, InMemoryUserRepository
from shiftdesk.users.model import User

MONDAY_9AM = datetime(2025, 1, 6, 9, 0, 0, tzinfo=pytz.UTC)

ADMIN = User(user_id="A1", username="admin", full_name="Ada Admin", role=Role.ADMIN, department="IT")
MANAGER = User(user_id="M1", username="mgr", full_name="Max Manager", role=Role.MANAGER, department="Ops")
TEAM_LEAD = User(
    user_id="TL1",
    username="lead",
    full_name="Lee Lead",
    role=Role.TEAM_LEAD,
    department="Ops",
    manager_id="M1",
)
STAFF = User(
    user_id="S1",
    username="sam",
    full_name="Sam Staff",
    role=Role.STAFF,
    department="Ops",
    shift_start_time="09:00",
    team_lead_id="TL1",
    manager_id="M1",
)
OTHER_STAFF = User(
    user_id="S2",
    username="kim",
    full_name="Kim Sales",
    role=Role.STAFF,
    department="Sales",
    shift_start_time="08:30",
)
HR = User(user_id="H1", username="hr", full_name="Hana HR", role=Role.HR, department="People")

ALL_USERS = (ADMIN, MANAGER, TEAM_LEAD, STAFF, OTHER_STAFF, HR)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(users=InMemoryUserRepository(ALL_USERS))


@pytest.fixture
def container(store):
    return build_memory_container(store)


@pytest.fixture
def monday_9am() -> datetime:
    return MONDAY_9AM
