# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient

from core.config import settings


def test_login_success_sets_session_cookie(client: TestClient):
    response = client.post(
        "/api/login",
        json={"email": "Tenant@Example.com", "password": "secret123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "tenant-1"
    assert data["role"] == "tenant"
    assert response.cookies.get(settings.SESSION_COOKIE_NAME) == "session-tenant-1"


def test_login_invalid_credentials(client: TestClient):
    response = client.post(
        "/api/login",
        json={"email": "tenant@example.com", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert "Invalid email or password" in response.json()["detail"]


def test_login_rate_limiting(client: TestClient):
    for _ in range(settings.LOGIN_RATE_LIMIT):
        response = client.post(
            "/api/login",
            json={"email": "owner@example.com", "password": "nope"},
        )
        assert response.status_code == 401

    response = client.post(
        "/api/login",
        json={"email": "owner@example.com", "password": "secret123"},
    )
    assert response.status_code == 429
    assert "Retry-After" in response.headers


def test_cookie_session_reaches_protected_routes(client: TestClient):
    client.post("/api/login", json={"email": "guard@example.com", "password": "secret123"})

    response = client.get("/api/user")

    assert response.status_code == 200
    assert response.json()["role"] == "security"


def test_logout_clears_session(client: TestClient):
    client.post("/api/login", json={"email": "tenant@example.com", "password": "secret123"})

    response = client.post("/api/logout")
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get("/api/user").status_code == 401


def test_bearer_token_identifies_user(client: TestClient, auth_headers):
    response = client.get("/api/user", headers=auth_headers("owner"))

    assert response.status_code == 200
    assert response.json()["id"] == "owner-1"


def test_requests_without_session_rejected(client: TestClient):
    for path in ("/api/user", "/api/apartments", "/api/visitors", "/api/announcements"):
        response = client.get(path)
        assert response.status_code == 401


def test_invalid_token_rejected(client: TestClient):
    response = client.get("/api/user", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401


def test_register_creates_account(client: TestClient):
    response = client.post(
        "/api/register",
        json={"email": "new@example.com", "password": "hunter22", "name": "Asha", "role": "owner"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["role"] == "owner"
    assert data["name"] == "Asha"

    assert client.get("/api/user").json()["email"] == "new@example.com"


def test_register_defaults_to_tenant(client: TestClient):
    response = client.post(
        "/api/register",
        json={"email": "quiet@example.com", "password": "hunter22", "name": "Ravi"},
    )

    assert response.status_code == 201
    assert response.json()["role"] == "tenant"


def test_register_duplicate_email(client: TestClient):
    response = client.post(
        "/api/register",
        json={"email": "tenant@example.com", "password": "hunter22", "name": "Again"},
    )

    assert response.status_code == 400
    assert "already registered" in response.json()["detail"]


def test_register_short_password(client: TestClient):
    response = client.post(
        "/api/register",
        json={"email": "x@example.com", "password": "123", "name": "X"},
    )
    assert response.status_code == 400
