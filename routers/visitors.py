# routers/visitors.py

from typing import List

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import get_current_user, CurrentUser
from core.errors import NotFoundError
from core.logging_config import logger
from core.notifications import log_visitor_notification, send_approval_request
from core.supabase_client import get_supabase_client
from core.supabase_helpers import compare_and_swap, safe_get, safe_insert, safe_select
from core.utils import utc_now
from models.enums import VisitorStatus
from models.visitor import VisitorActionResponse, VisitorCreate, VisitorRead, VisitorStatusUpdate
from services import visitor_lifecycle
from services.visibility import Resource, resolve_visibility

router = APIRouter(
    prefix="/api/visitors",
    tags=["Visitors"],
)

TABLE = "visitors"


def get_visitor_or_404(client: Client, visitor_id: int) -> dict:
    visitor = safe_get(client, TABLE, visitor_id)
    if not visitor:
        raise NotFoundError("Visitor not found")
    return visitor


# -------------------------------------------------------------
# REGISTER Visitor (always starts upcoming)
# -------------------------------------------------------------
@router.post("", response_model=VisitorRead, status_code=201)
def create_visitor(
    payload: VisitorCreate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    data = {**payload.model_dump(), **visitor_lifecycle.initial_fields()}

    created = safe_insert(client, TABLE, data)
    logger.info(
        f"User {current_user.id} registered visitor {created['id']} "
        f"for apartment {created['apartment_id']}"
    )
    return created


# -------------------------------------------------------------
# LIST Visitors (tenants: their first apartment only)
# -------------------------------------------------------------
@router.get("", response_model=List[VisitorRead])
def list_visitors(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    rule = resolve_visibility(client, current_user, Resource.visitor)
    return safe_select(client, TABLE, rule=rule, order="expected_at", desc=True)


# -------------------------------------------------------------
# UPDATE Status (approve / deny / check-in / check-out)
# -------------------------------------------------------------
@router.patch("/{visitor_id}/status", response_model=VisitorRead)
def update_visitor_status(
    visitor_id: int,
    payload: VisitorStatusUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    target = visitor_lifecycle.parse_target(payload.status)
    visitor = get_visitor_or_404(client, visitor_id)

    apartment = None
    if visitor["status"] == VisitorStatus.pending.value:
        apartment = safe_get(client, "apartments", visitor["apartment_id"])

    patch = visitor_lifecycle.plan_status_change(
        visitor, target, current_user, utc_now(), apartment=apartment
    )

    updated = compare_and_swap(
        client,
        TABLE,
        visitor_id,
        {"status": visitor["status"]},
        patch,
        label="Visitor",
    )

    logger.info(
        f"User {current_user.id} moved visitor {visitor_id} "
        f"from {visitor['status']} to {updated['status']}"
    )
    return updated


# -------------------------------------------------------------
# REQUEST Approval (security → owner/tenant)
# -------------------------------------------------------------
@router.post("/{visitor_id}/request-approval", response_model=VisitorActionResponse)
def request_visitor_approval(
    visitor_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    visitor_lifecycle.ensure_can_request_approval(current_user)
    visitor = get_visitor_or_404(client, visitor_id)

    patch = visitor_lifecycle.plan_approval_request(visitor)
    updated = compare_and_swap(
        client,
        TABLE,
        visitor_id,
        {"status": visitor["status"]},
        patch,
        label="Visitor",
    )

    send_approval_request(updated, current_user.id)
    return {
        "success": True,
        "message": "Approval request sent to owner and tenant",
        "visitor": updated,
    }


# -------------------------------------------------------------
# NOTIFY Resident (security, no state change)
# -------------------------------------------------------------
@router.post("/{visitor_id}/notify", response_model=VisitorActionResponse)
def notify_resident(
    visitor_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    visitor_lifecycle.ensure_can_notify(current_user)
    visitor = get_visitor_or_404(client, visitor_id)

    log_visitor_notification(visitor, current_user.id)
    return {"success": True, "message": "Notification sent successfully"}
