# routers/announcements.py

from typing import List

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import get_current_user, CurrentUser
from core.logging_config import logger
from core.permission_helpers import requires_permission
from core.supabase_client import get_supabase_client
from core.supabase_helpers import safe_insert, safe_select
from core.utils import utc_now
from models.announcement import AnnouncementCreate, AnnouncementRead

router = APIRouter(
    prefix="/api/announcements",
    tags=["Announcements"],
)

TABLE = "announcements"


@router.post("", response_model=AnnouncementRead, status_code=201)
def create_announcement(
    payload: AnnouncementCreate,
    current_user: CurrentUser = Depends(requires_permission("announcements:write", "Forbidden")),
    client: Client = Depends(get_supabase_client),
):
    data = {
        **payload.model_dump(),
        "created_by": current_user.id,
        "created_at": utc_now(),
    }

    created = safe_insert(client, TABLE, data)
    logger.info(f"User {current_user.id} posted announcement {created['id']}")
    return created


@router.get("", response_model=List[AnnouncementRead], dependencies=[Depends(get_current_user)])
def list_announcements(
    client: Client = Depends(get_supabase_client),
):
    """Newest first."""
    return safe_select(client, TABLE, order="created_at", desc=True)
