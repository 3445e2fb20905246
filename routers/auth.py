# routers/auth.py

from fastapi import APIRouter, Depends, Request, Response
from supabase import Client

from core.config import settings
from core.errors import AuthenticationError, ValidationError, extract_supabase_error
from core.logging_config import logger
from core.rate_limiter import require_rate_limit, get_rate_limit_identifier
from core.supabase_client import get_auth_client
from dependencies.auth import get_current_user, user_from_auth, CurrentUser
from models.auth import LoginRequest, LogoutResponse, RegisterRequest


router = APIRouter(
    prefix="/api",
    tags=["Auth"],
)


# ============================================================
# SESSION COOKIE
# ============================================================
def open_session(response: Response, access_token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


# ============================================================
# REGISTER (SUPABASE AUTH)
# ============================================================
@router.post("/register", response_model=CurrentUser, status_code=201, summary="Create an account")
def register(
    payload: RegisterRequest,
    response: Response,
    client: Client = Depends(get_auth_client),
):
    email = payload.email.strip().lower()

    try:
        auth_resp = client.auth.sign_up({
            "email": email,
            "password": payload.password,
            "options": {"data": {"role": payload.role.value, "name": payload.name.strip()}},
        })
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.warning(f"Registration failed for {email}: {detail}")
        raise ValidationError(f"Registration failed: {detail}") from e

    if not auth_resp.user:
        raise ValidationError("Registration failed")

    # No session when the project requires email confirmation first
    if auth_resp.session and auth_resp.session.access_token:
        open_session(response, auth_resp.session.access_token)

    logger.info(f"Registered {payload.role.value} account {auth_resp.user.id}")
    return user_from_auth(auth_resp.user)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=CurrentUser, summary="Authenticate user")
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    client: Client = Depends(get_auth_client),
):
    email = payload.email.strip().lower()

    identifier = get_rate_limit_identifier(request, user_id=email)
    require_rate_limit(
        request,
        identifier=identifier,
        max_requests=settings.LOGIN_RATE_LIMIT,
        window_seconds=settings.LOGIN_RATE_WINDOW_SECONDS,
    )

    try:
        auth_resp = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Log the error for debugging but don't expose details to user
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise AuthenticationError("Invalid email or password") from e

    if not auth_resp.session or not auth_resp.session.access_token or not auth_resp.user:
        raise AuthenticationError("Invalid email or password")

    open_session(response, auth_resp.session.access_token)
    return user_from_auth(auth_resp.user)


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", response_model=LogoutResponse, summary="End the session")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return LogoutResponse()


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/user", response_model=CurrentUser, summary="Current authenticated user")
def read_current_user(current_user: CurrentUser = Depends(get_current_user)):
    return current_user
