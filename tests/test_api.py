from __future__ import annotations

import asyncio

import pytest

from shiftdesk.container import build_memory_container
from shiftdesk.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


def test_requires_login(client):
    resp = client.get("/api/attendance")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_checkin_then_early_checkout_is_refused(client, store):
    login(client, "S1")

    resp = client.post("/api/attendance/check-in")
    assert resp.status_code == 201
    record = resp.get_json()["record"]
    assert record["check_out"] is None

    current = client.get("/api/attendance/current").get_json()
    assert current["state"] == "OPEN"
    assert current["record"]["id"] == record["id"]

    again = client.post("/api/attendance/check-in")
    assert again.status_code == 400

    early = client.post("/api/attendance/check-out")
    assert early.status_code == 409
    body = early.get_json()
    assert body["success"] is False
    assert body["remaining_minutes"] == 60

    assert len(store.notifications.all()) == 2


def test_checkout_without_session_is_bad_request(client):
    login(client, "S1")
    assert client.post("/api/attendance/check-out").status_code == 400


def test_ledger_is_scoped_to_viewer(client):
    login(client, "S2")
    client.post("/api/attendance/check-in")
    login(client, "S1")
    client.post("/api/attendance/check-in")

    own = client.get("/api/attendance").get_json()["rows"]
    assert [row["user_id"] for row in own] == ["S1"]
    assert own[0]["hours"] == "Active"

    login(client, "M1")
    everyone = client.get("/api/attendance").get_json()["rows"]
    assert sorted(row["user_id"] for row in everyone) == ["S1", "S2"]

    filtered = client.get("/api/attendance?user_id=S2").get_json()["rows"]
    assert [row["user_id"] for row in filtered] == ["S2"]


def test_admin_edit_and_delete(client):
    login(client, "S1")
    attendance_id = client.post("/api/attendance/check-in").get_json()["record"]["id"]

    forbidden = client.put(f"/api/attendance/{attendance_id}", json={"status": "LATE"})
    assert forbidden.status_code == 403

    login(client, "A1")
    edited = client.put(
        f"/api/attendance/{attendance_id}",
        json={"check_out": "2025-01-06T17:00:00.000Z", "status": "PRESENT"},
    )
    assert edited.status_code == 200
    assert edited.get_json()["record"]["check_out"] == "2025-01-06 17:00:00"

    assert client.delete(f"/api/attendance/{attendance_id}").status_code == 200
    assert client.delete(f"/api/attendance/{attendance_id}").status_code == 400


def test_leave_flow(client):
    login(client, "S1")
    created = client.post(
        "/api/leaves",
        json={"start_date": "2025-02-03", "end_date": "2025-02-04", "leave_type": "sick", "reason": "flu"},
    )
    assert created.status_code == 201
    leave_id = created.get_json()["leave"]["id"]

    assert client.post(f"/api/leaves/{leave_id}/approve").status_code == 403

    login(client, "TL1")
    assert [lv["id"] for lv in client.get("/api/leaves").get_json()["leaves"]] == [leave_id]
    assert client.get("/api/leaves?status=bogus").status_code == 400

    login(client, "M1")
    approved = client.post(f"/api/leaves/{leave_id}/approve")
    assert approved.status_code == 200
    assert approved.get_json()["leave"]["status"] == "APPROVED"

    login(client, "S1")
    assert client.delete(f"/api/leaves/{leave_id}").status_code == 400
    inbox = client.get("/api/notifications").get_json()["notifications"]
    assert inbox[0]["message"].endswith("has been APPROVED")


def test_notification_inbox_endpoints(client):
    login(client, "S1")
    client.post("/api/attendance/check-in")

    login(client, "TL1")
    assert client.get("/api/notifications/unread-count").get_json()["unread"] == 1
    inbox = client.get("/api/notifications").get_json()["notifications"]
    assert len(inbox) == 1
    assert inbox[0]["is_read"] is False
    assert client.get("/api/notifications/unread-count").get_json()["unread"] == 0

    login(client, "M1")
    ids = [n["id"] for n in client.get("/api/notifications").get_json()["notifications"]]
    assert client.post("/api/notifications/read", json={"ids": ids}).get_json()["updated"] == 0
    assert client.post("/api/notifications/read", json={"ids": ["x"]}).status_code == 400


def test_storage_failure_is_hidden_behind_generic_message(monkeypatch, client, store):
    async def broken():
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store.attendance, "get_attendance_records", broken)
    login(client, "A1")

    resp = client.get("/api/attendance")
    assert resp.status_code == 500
    assert "disk on fire" not in resp.get_json()["message"]


def test_memory_backend_seeds_demo_users():
    container = build_memory_container(seed_demo=True)
    assert asyncio.run(container.users_repo.get_by_id("U-STAFF1")).team_lead_id == "U-TL"
