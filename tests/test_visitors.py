# tests/test_visitors.py

"""
Tests for the visitor endpoints and their gate workflow.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch


NEW_VISITOR = {
    "name": "John",
    "purpose": "Delivery",
    "contactNumber": "555",
    "apartmentId": 1,
    "expectedAt": "2026-10-18T12:00:00Z",
}


def test_create_visitor_forces_upcoming(client: TestClient, auth_headers):
    body = {**NEW_VISITOR, "status": "current", "pendingApproval": True}
    response = client.post("/api/visitors", json=body, headers=auth_headers("security"))

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "upcoming"
    assert data["pendingApproval"] is False
    assert data["name"] == "John"
    assert data["apartmentId"] == 1


def test_create_visitor_missing_fields(client: TestClient, auth_headers):
    response = client.post(
        "/api/visitors", json={"name": "John"}, headers=auth_headers("tenant")
    )
    assert response.status_code == 400


def test_create_visitor_requires_session(client: TestClient):
    response = client.post("/api/visitors", json=NEW_VISITOR)
    assert response.status_code == 401


def test_security_requests_approval(client: TestClient, auth_headers, fake_supabase):
    with patch("routers.visitors.send_approval_request") as notify:
        response = client.post("/api/visitors/5/request-approval", headers=auth_headers("security"))

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["visitor"]["pendingApproval"] is True
    assert data["visitor"]["status"] == "pending"
    assert fake_supabase.row("visitors", 5)["pending_approval"] is True
    notify.assert_called_once()


def test_tenant_approves_flagged_visitor(client: TestClient, auth_headers, fake_supabase):
    client.post("/api/visitors/5/request-approval", headers=auth_headers("security"))

    response = client.patch(
        "/api/visitors/5/status", json={"status": "current"}, headers=auth_headers("tenant")
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "current"
    assert data["actualEntryAt"] is not None
    assert data["pendingApproval"] is False
    assert data["approvedBy"] == "tenant-1"


def test_owner_denies_pending_visitor(client: TestClient, auth_headers):
    response = client.patch(
        "/api/visitors/5/status", json={"status": "past"}, headers=auth_headers("owner")
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "past"
    assert data["actualExitAt"] is not None
    assert data["pendingApproval"] is False


def test_security_cannot_approve(client: TestClient, auth_headers, fake_supabase):
    client.post("/api/visitors/5/request-approval", headers=auth_headers("security"))
    before = fake_supabase.row("visitors", 5)

    response = client.patch(
        "/api/visitors/5/status", json={"status": "current"}, headers=auth_headers("security")
    )

    assert response.status_code == 403
    assert fake_supabase.row("visitors", 5) == before


def test_other_tenant_cannot_approve(client: TestClient, auth_headers, fake_supabase):
    before = fake_supabase.row("visitors", 5)
    writes_before = len(fake_supabase.writes())

    response = client.patch(
        "/api/visitors/5/status", json={"status": "past"}, headers=auth_headers("other_tenant")
    )

    assert response.status_code == 403
    assert fake_supabase.row("visitors", 5) == before
    assert len(fake_supabase.writes()) == writes_before


def test_check_in_outside_pending_is_open(client: TestClient, auth_headers):
    response = client.patch(
        "/api/visitors/6/status", json={"status": "current"}, headers=auth_headers("security")
    )
    assert response.status_code == 200
    assert response.json()["status"] == "current"


def test_status_update_rejects_pending_target(client: TestClient, auth_headers, fake_supabase):
    response = client.patch(
        "/api/visitors/6/status", json={"status": "pending"}, headers=auth_headers("manager")
    )
    assert response.status_code == 400
    assert fake_supabase.writes() == []


def test_status_update_rejects_unknown_status(client: TestClient, auth_headers):
    response = client.patch(
        "/api/visitors/6/status", json={"status": "teleported"}, headers=auth_headers("manager")
    )
    assert response.status_code == 400


def test_status_update_unknown_visitor(client: TestClient, auth_headers):
    response = client.patch(
        "/api/visitors/999/status", json={"status": "past"}, headers=auth_headers("manager")
    )
    assert response.status_code == 404


def test_stale_read_reports_conflict(client: TestClient, auth_headers, fake_supabase):
    # Another request already moved visitor 10 on; our read still says pending
    stale = {**fake_supabase.row("visitors", 10), "status": "pending"}
    before = fake_supabase.row("visitors", 10)

    with patch("routers.visitors.get_visitor_or_404", return_value=stale):
        response = client.patch(
            "/api/visitors/10/status", json={"status": "past"}, headers=auth_headers("manager")
        )

    assert response.status_code == 409
    assert fake_supabase.row("visitors", 10) == before


def test_request_approval_moves_upcoming_visitor_to_pending(client: TestClient, auth_headers, fake_supabase):
    with patch("routers.visitors.send_approval_request"):
        response = client.post("/api/visitors/6/request-approval", headers=auth_headers("security"))

    assert response.status_code == 200
    row = fake_supabase.row("visitors", 6)
    assert row["status"] == "pending"
    assert row["pending_approval"] is True


def test_request_approval_security_only(client: TestClient, auth_headers, fake_supabase):
    response = client.post("/api/visitors/5/request-approval", headers=auth_headers("tenant"))
    assert response.status_code == 403
    assert fake_supabase.row("visitors", 5)["pending_approval"] is False


def test_request_approval_after_entry_conflicts(client: TestClient, auth_headers):
    response = client.post("/api/visitors/10/request-approval", headers=auth_headers("security"))
    assert response.status_code == 409


def test_request_approval_unknown_visitor(client: TestClient, auth_headers):
    response = client.post("/api/visitors/999/request-approval", headers=auth_headers("security"))
    assert response.status_code == 404


def test_security_notifies_resident(client: TestClient, auth_headers, fake_supabase):
    before = fake_supabase.row("visitors", 10)

    with patch("core.notifications.send_webhook_message") as webhook:
        response = client.post("/api/visitors/10/notify", headers=auth_headers("security"))

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Notification sent successfully",
        "visitor": None,
    }
    assert fake_supabase.row("visitors", 10) == before
    webhook.assert_called_once()


def test_notify_security_only(client: TestClient, auth_headers):
    response = client.post("/api/visitors/10/notify", headers=auth_headers("manager"))
    assert response.status_code == 403


def test_tenant_sees_first_apartment_visitors_only(client: TestClient, auth_headers):
    response = client.get("/api/visitors", headers=auth_headers("tenant"))

    assert response.status_code == 200
    ids = {v["id"] for v in response.json()}
    assert ids == {5, 10}


def test_manager_sees_all_visitors(client: TestClient, auth_headers):
    response = client.get("/api/visitors", headers=auth_headers("manager"))

    assert response.status_code == 200
    data = response.json()
    assert {v["id"] for v in data} == {5, 6, 9, 10}
    # NULL flag in the store reads back as False
    assert next(v for v in data if v["id"] == 6)["pendingApproval"] is False


def test_flag_never_outlives_pending(client: TestClient, auth_headers, fake_supabase):
    client.post("/api/visitors/6/request-approval", headers=auth_headers("security"))
    client.patch("/api/visitors/6/status", json={"status": "upcoming"}, headers=auth_headers("manager"))
    client.post("/api/visitors/5/request-approval", headers=auth_headers("security"))
    client.patch("/api/visitors/5/status", json={"status": "past"}, headers=auth_headers("tenant"))

    for visitor in fake_supabase.tables["visitors"]:
        if visitor["pending_approval"] is True:
            assert visitor["status"] == "pending"
    assert fake_supabase.row("visitors", 5)["pending_approval"] is False
    assert fake_supabase.row("visitors", 6)["pending_approval"] is False
