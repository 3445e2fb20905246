# routers/payments.py

import re
from typing import List

from fastapi import APIRouter, Depends, Request
from supabase import Client

from dependencies.auth import get_current_user, CurrentUser
from core.errors import ValidationError
from core.config import settings
from core.logging_config import logger
from core.rate_limiter import require_rate_limit
from core.supabase_client import get_supabase_client
from core.supabase_helpers import safe_insert, safe_select
from core.utils import utc_now
from models.payment import PaymentCreate, PaymentRead, UpiPaymentRequest, UpiPaymentResponse
from services.visibility import Resource, apartment_ids_for, resolve_visibility

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
)

TABLE = "payments"

# Virtual payment address: handle@psp
UPI_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{2,256}@[A-Za-z][A-Za-z0-9]{1,63}$")


# -------------------------------------------------------------
# RECORD Payment (immutable ledger entry)
# -------------------------------------------------------------
@router.post("", response_model=PaymentRead, status_code=201)
def create_payment(
    payload: PaymentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    data = payload.model_dump()
    data["tenant_id"] = payload.tenant_id or current_user.id

    created = safe_insert(client, TABLE, data)
    logger.info(
        f"User {current_user.id} recorded {created['type']} payment {created['id']} "
        f"of {created['amount']} for apartment {created['apartment_id']}"
    )
    return created


# -------------------------------------------------------------
# UPI Payment (simulated capture, no gateway call)
# -------------------------------------------------------------
@router.post("/upi", response_model=UpiPaymentResponse, status_code=201)
def create_upi_payment(
    payload: UpiPaymentRequest,
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    require_rate_limit(
        request,
        identifier=f"upi:{current_user.id}",
        max_requests=settings.UPI_RATE_LIMIT,
        window_seconds=settings.UPI_RATE_WINDOW_SECONDS,
    )

    if not payload.upi_id or not payload.amount:
        raise ValidationError("UPI ID and amount are required")

    upi_id = payload.upi_id.strip()
    if not UPI_ID_PATTERN.match(upi_id):
        raise ValidationError("Invalid UPI ID")

    if payload.amount <= 0 or payload.amount != int(payload.amount):
        raise ValidationError("Amount must be a positive whole number")

    apartment_id = payload.apartment_id
    if apartment_id is None:
        rented = apartment_ids_for(client, "tenant_id", current_user.id)
        if not rented:
            raise ValidationError("apartmentId is required")
        apartment_id = rented[0]

    created = safe_insert(client, TABLE, {
        "apartment_id": apartment_id,
        "tenant_id": current_user.id,
        "amount": int(payload.amount),
        "date": utc_now(),
        "type": payload.type,
    })

    logger.info(
        f"Simulated UPI capture from {upi_id}: payment {created['id']} "
        f"({created['amount']}) by {current_user.id}"
    )
    return {"success": True, "payment": created}


# -------------------------------------------------------------
# LIST Payments (role-scoped)
# -------------------------------------------------------------
@router.get("", response_model=List[PaymentRead])
def list_payments(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    rule = resolve_visibility(client, current_user, Resource.payment)
    return safe_select(client, TABLE, rule=rule, order="date", desc=True)
