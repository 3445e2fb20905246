# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser
from models.enums import Role
from fake_supabase import FakeSupabase


USERS = {
    "tenant": ("tenant-1", "tenant@example.com", Role.tenant),
    "other_tenant": ("tenant-2", "tenant2@example.com", Role.tenant),
    "owner": ("owner-1", "owner@example.com", Role.owner),
    "manager": ("manager-1", "manager@example.com", Role.manager),
    "security": ("security-1", "guard@example.com", Role.security),
    "visitor": ("visitor-1", "guest@example.com", Role.visitor),
}


APARTMENTS = [
    {"id": 1, "number": "101", "building": "Block A", "society_name": "Green Park",
     "tenant_id": "tenant-1", "owner_id": "owner-1", "rent": 1200, "area": 1000,
     "status": "occupied", "amenities": ["AC", "Parking"], "last_maintenance_date": None},
    {"id": 2, "number": "102", "building": "Block A", "society_name": "Green Park",
     "tenant_id": "tenant-2", "owner_id": "owner-2", "rent": 1100, "area": 950,
     "status": "occupied", "amenities": None, "last_maintenance_date": None},
    {"id": 3, "number": "201", "building": "Block B", "society_name": "Green Park",
     "tenant_id": None, "owner_id": "owner-1", "rent": 1500, "area": 1300,
     "status": "vacant", "amenities": None, "last_maintenance_date": None},
    {"id": 4, "number": "301", "building": "Block C", "society_name": "Green Park",
     "tenant_id": "tenant-1", "owner_id": None, "rent": 900, "area": 700,
     "status": "occupied", "amenities": None, "last_maintenance_date": None},
]

MAINTENANCE_REQUESTS = [
    {"id": 7, "apartment_id": 1, "tenant_id": "tenant-1", "description": "AC needs servicing",
     "status": "in_progress", "created_at": "2026-10-01T09:00:00+00:00",
     "updated_at": "2026-10-02T09:00:00+00:00"},
    {"id": 8, "apartment_id": 2, "tenant_id": "tenant-2", "description": "Leaking tap",
     "status": "pending", "created_at": "2026-10-03T09:00:00+00:00",
     "updated_at": "2026-10-03T09:00:00+00:00"},
]

PAYMENTS = [
    {"id": 1, "apartment_id": 1, "tenant_id": "tenant-1", "amount": 1200,
     "date": "2026-10-01T00:00:00+00:00", "type": "rent"},
    {"id": 2, "apartment_id": 2, "tenant_id": "tenant-2", "amount": 1100,
     "date": "2026-10-02T00:00:00+00:00", "type": "rent"},
    {"id": 3, "apartment_id": 4, "tenant_id": "tenant-1", "amount": 150,
     "date": "2026-10-05T00:00:00+00:00", "type": "maintenance"},
]

VISITORS = [
    {"id": 5, "name": "Courier", "purpose": "Delivery", "contact_number": "555-0101",
     "apartment_id": 1, "expected_at": "2026-10-18T10:00:00+00:00", "status": "pending",
     "pending_approval": False, "approved_by": None, "actual_entry_at": None, "actual_exit_at": None},
    {"id": 6, "name": "Plumber", "purpose": "Repair", "contact_number": "555-0102",
     "apartment_id": 2, "expected_at": "2026-10-18T11:00:00+00:00", "status": "upcoming",
     "pending_approval": None, "approved_by": None, "actual_entry_at": None, "actual_exit_at": None},
    {"id": 9, "name": "Cousin", "purpose": "Family visit", "contact_number": "555-0103",
     "apartment_id": 4, "expected_at": "2026-10-19T18:00:00+00:00", "status": "upcoming",
     "pending_approval": False, "approved_by": None, "actual_entry_at": None, "actual_exit_at": None},
    {"id": 10, "name": "Friend", "purpose": "Dinner", "contact_number": "555-0104",
     "apartment_id": 1, "expected_at": "2026-10-17T19:00:00+00:00", "status": "current",
     "pending_approval": False, "approved_by": "tenant-1",
     "actual_entry_at": "2026-10-17T19:05:00+00:00", "actual_exit_at": None},
]

ANNOUNCEMENTS = [
    {"id": 1, "title": "Water cut", "content": "No water on Sunday 10-12.",
     "important": True, "created_by": "manager-1", "created_at": "2026-10-10T08:00:00+00:00"},
    {"id": 2, "title": "Diwali party", "content": "Clubhouse, 7pm.",
     "important": False, "created_by": "manager-1", "created_at": "2026-10-15T08:00:00+00:00"},
]


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    """An in-memory store seeded with a small society."""
    fake = FakeSupabase()
    for _, (user_id, email, role) in USERS.items():
        fake.auth.add_user(user_id, email, role.value)
    fake.seed("apartments", APARTMENTS)
    fake.seed("maintenance_requests", MAINTENANCE_REQUESTS)
    fake.seed("payments", PAYMENTS)
    fake.seed("visitors", VISITORS)
    fake.seed("announcements", ANNOUNCEMENTS)
    return fake


@pytest.fixture(scope="function")
def app(fake_supabase):
    """Create a test FastAPI application bound to the fake store."""
    return create_app(supabase=fake_supabase, auth_client=fake_supabase)


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """auth_headers("manager") → bearer header for that seeded user."""
    def build(who: str) -> dict:
        user_id = USERS[who][0]
        return {"Authorization": f"Bearer token-{user_id}"}
    return build


@pytest.fixture
def make_user():
    """make_user("owner") → CurrentUser for pure policy tests."""
    def build(who: str) -> CurrentUser:
        user_id, email, role = USERS[who]
        return CurrentUser(id=user_id, email=email, role=role)
    return build


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Reset the login limiter before each test."""
    from core.rate_limiter import reset_rate_limits
    reset_rate_limits()
    yield
    reset_rate_limits()
