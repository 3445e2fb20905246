# routers/maintenance.py

from typing import List

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import get_current_user, CurrentUser
from core.errors import NotFoundError
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from core.supabase_helpers import compare_and_swap, safe_get, safe_insert, safe_select
from core.utils import utc_now
from models.maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceStatusUpdate,
)
from services import maintenance_lifecycle
from services.visibility import Resource, resolve_visibility

router = APIRouter(
    prefix="/api/maintenance",
    tags=["Maintenance"],
)

TABLE = "maintenance_requests"


# -------------------------------------------------------------
# CREATE Maintenance Request (always starts pending)
# -------------------------------------------------------------
@router.post("", response_model=MaintenanceRequestRead, status_code=201)
def create_maintenance_request(
    payload: MaintenanceRequestCreate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    now = utc_now()
    data = {
        "apartment_id": payload.apartment_id,
        "tenant_id": payload.tenant_id or current_user.id,
        "description": payload.description,
        **maintenance_lifecycle.initial_fields(),
        "created_at": now,
        "updated_at": now,
    }

    created = safe_insert(client, TABLE, data)
    logger.info(
        f"User {current_user.id} opened maintenance request {created['id']} "
        f"for apartment {created['apartment_id']}"
    )
    return created


# -------------------------------------------------------------
# LIST Maintenance Requests (tenants: own tickets only)
# -------------------------------------------------------------
@router.get("", response_model=List[MaintenanceRequestRead])
def list_maintenance_requests(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    rule = resolve_visibility(client, current_user, Resource.maintenance)
    return safe_select(client, TABLE, rule=rule, order="created_at", desc=True)


# -------------------------------------------------------------
# UPDATE Status (manager decides anything past pending)
# -------------------------------------------------------------
@router.patch("/{request_id}", response_model=MaintenanceRequestRead)
def update_maintenance_status(
    request_id: int,
    payload: MaintenanceStatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    existing = safe_get(client, TABLE, request_id)
    if not existing:
        raise NotFoundError("Maintenance request not found")

    patch = maintenance_lifecycle.plan_status_change(existing, payload.status, current_user)
    patch["updated_at"] = utc_now()

    updated = compare_and_swap(
        client,
        TABLE,
        request_id,
        {"status": existing["status"]},
        patch,
        label="Maintenance request",
    )

    logger.info(
        f"User {current_user.id} moved maintenance request {request_id} "
        f"from {existing['status']} to {updated['status']}"
    )
    return updated
