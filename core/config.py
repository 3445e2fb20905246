# core/config.py

from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Society Management API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # CORS (frontend origins, JSON list in env)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # Supabase (primary DB + session/identity store)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Session cookie
    # -------------------------------------------------
    SESSION_COOKIE_NAME: str = "society_session"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7

    # -------------------------------------------------
    # Login throttling
    # -------------------------------------------------
    LOGIN_RATE_LIMIT: int = 10
    LOGIN_RATE_WINDOW_SECONDS: int = 900

    # -------------------------------------------------
    # Simulated UPI capture throttling (per user)
    # -------------------------------------------------
    UPI_RATE_LIMIT: int = 5
    UPI_RATE_WINDOW_SECONDS: int = 60

    # -------------------------------------------------
    # Resident notifications (Discord, Slack, etc.)
    # -------------------------------------------------
    NOTIFY_WEBHOOK_URL: Optional[str] = None

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

settings.BACKEND_CORS_ORIGINS = sorted(
    {origin.rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS}
)
