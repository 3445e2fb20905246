# routers/health.py

from fastapi import APIRouter, Request

from core.errors import InternalError
from core.supabase_client import get_supabase_client, ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + table queries
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
def health_db(request: Request):
    """
    Verifies Supabase connectivity.
    - Checks if URL + key are configured
    - Attempts to query every table the API uses
    - Returns row-count + error details per table
    """
    try:
        client = get_supabase_client(request)
    except InternalError:
        client = None

    status = ping_supabase(client)
    return {
        "service": "Supabase",
        "status": status.get("status", "unknown"),
        "details": status,
    }


# -----------------------------------------------------
# GET /health/app
# Lightweight liveness check
# -----------------------------------------------------
@router.get("/app", summary="App health check")
def health_app():
    return {
        "service": "Society API",
        "status": "ok",
    }
