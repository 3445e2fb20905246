# routers/apartments.py

from typing import List

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import get_current_user, CurrentUser
from core.errors import AuthorizationError, NotFoundError, ValidationError
from core.logging_config import logger
from core.permission_helpers import requires_permission
from core.supabase_client import get_supabase_client
from core.supabase_helpers import safe_get, safe_insert, safe_select, safe_update
from models.apartment import ApartmentCreate, ApartmentRead, ApartmentUpdate
from models.enums import Role
from services.visibility import Resource, resolve_visibility

router = APIRouter(
    prefix="/api/apartments",
    tags=["Apartments"],
)

TABLE = "apartments"


# -------------------------------------------------------------
# LIST my tenancies (every role: apartments I rent)
# -------------------------------------------------------------
@router.get("", response_model=List[ApartmentRead])
def list_my_apartments(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_supabase_client),
):
    return safe_select(client, TABLE, {"tenant_id": current_user.id})


# -------------------------------------------------------------
# LIST all (managers/security) or owned (owners)
# -------------------------------------------------------------
@router.get("/all", response_model=List[ApartmentRead])
def list_all_apartments(
    current_user: CurrentUser = Depends(requires_permission("apartments:read_all", "Forbidden")),
    client: Client = Depends(get_supabase_client),
):
    rule = resolve_visibility(client, current_user, Resource.apartment)
    return safe_select(client, TABLE, rule=rule, order="building")


# -------------------------------------------------------------
# CREATE Apartment
# -------------------------------------------------------------
@router.post("", response_model=ApartmentRead, status_code=201)
def create_apartment(
    payload: ApartmentCreate,
    current_user: CurrentUser = Depends(requires_permission("apartments:write", "Forbidden")),
    client: Client = Depends(get_supabase_client),
):
    created = safe_insert(client, TABLE, payload.model_dump())
    logger.info(
        f"User {current_user.id} created apartment {created['id']} "
        f"({created['building']}-{created['number']})"
    )
    return created


# -------------------------------------------------------------
# UPDATE Apartment (owners: only their own)
# -------------------------------------------------------------
@router.patch("/{apartment_id}", response_model=ApartmentRead)
def update_apartment(
    apartment_id: int,
    payload: ApartmentUpdate,
    current_user: CurrentUser = Depends(requires_permission("apartments:write", "Forbidden")),
    client: Client = Depends(get_supabase_client),
):
    apartment = safe_get(client, TABLE, apartment_id)
    if not apartment:
        raise NotFoundError("Apartment not found")

    if current_user.role == Role.owner and apartment.get("owner_id") != current_user.id:
        raise AuthorizationError("Not authorized to modify this apartment")

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")

    updated = safe_update(client, TABLE, {"id": apartment_id}, changes)
    if not updated:
        raise NotFoundError("Apartment not found")

    logger.info(f"User {current_user.id} updated apartment {apartment_id}: {sorted(changes)}")
    return updated
