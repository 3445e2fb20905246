# core/supabase_client.py

from typing import Optional

from fastapi import Request
from supabase import create_client, Client

from core.config import settings
from core.errors import InternalError
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

def create_supabase_client() -> Optional[Client]:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.
    Returns None when credentials are missing so health checks can report it.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        return create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# FastAPI dependency: one handle per application
# ============================================================

def get_supabase_client(request: Request) -> Client:
    """
    Returns the application's store handle, creating it on first use.
    The handle lives on app.state; create_app(supabase=...) can supply one.
    """
    client = getattr(request.app.state, "supabase", None)
    if client is None:
        client = create_supabase_client()
        if client is None:
            raise InternalError("Supabase client not configured")
        request.app.state.supabase = client
    return client


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase(client: Optional[Client]) -> dict:
    """
    Simple connectivity check against every table the API uses.
    Does NOT query auth tables.
    """
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    tables = ["apartments", "maintenance_requests", "payments", "visitors", "announcements"]
    results = {}

    for t in tables:
        try:
            res = client.table(t).select("id").limit(1).execute()
            results[t] = {
                "status": "ok",
                "rows_found": len(res.data or []),
            }
        except Exception as err:
            results[t] = {"status": "error", "detail": str(err)}

    overall = "ok" if all(r["status"] == "ok" for r in results.values()) else "degraded"
    return {
        "service": "Supabase",
        "status": overall,
        "tables": results,
    }


# ============================================================
# Auth client for password sign-in / sign-up
# ============================================================

def get_auth_client(request: Request) -> Client:
    """
    Password sign-in rebinds a client's auth header to the signed-in user,
    so it never runs on the shared service-role handle. Each call gets a
    fresh client unless create_app(auth_client=...) supplied one.
    """
    client = getattr(request.app.state, "auth_client", None)
    if client is not None:
        return client

    client = create_supabase_client()
    if client is None:
        raise InternalError("Supabase client not configured")
    return client
