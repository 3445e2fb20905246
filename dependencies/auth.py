# dependencies/auth.py

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.config import settings
from core.errors import AuthenticationError
from core.logging_config import logger
from core.roles import to_role
from core.supabase_client import get_supabase_client
from models.enums import Role


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Current User Model (backend identity)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: Role
    name: Optional[str] = None


def user_from_auth(auth_user) -> CurrentUser:
    """Build a CurrentUser from a Supabase Auth user object."""
    metadata = auth_user.user_metadata or {}

    return CurrentUser(
        id=str(auth_user.id),
        email=auth_user.email,
        role=to_role(metadata.get("role")),
        name=metadata.get("name"),
    )


def extract_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Bearer header wins; otherwise the session cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


# ============================================================
# AUTH DECODING (Supabase: validates the session token)
# ============================================================
def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    client: Client = Depends(get_supabase_client),
) -> CurrentUser:

    token = extract_session_token(request, credentials)
    if not token:
        raise AuthenticationError("Unauthorized")

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Session validation failed: {type(e).__name__}")
        raise AuthenticationError("Invalid or expired session") from e

    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise AuthenticationError("Invalid or expired session")

    return user_from_auth(auth_resp.user)

