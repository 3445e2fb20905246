# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .apartments import router as apartments_router
from .maintenance import router as maintenance_router
from .payments import router as payments_router
from .visitors import router as visitors_router
from .announcements import router as announcements_router
from .health import router as health_router


# Master router mounted by main.create_app
api_router = APIRouter()

# Session
api_router.include_router(auth_router)

# Society resources
api_router.include_router(apartments_router)
api_router.include_router(maintenance_router)
api_router.include_router(payments_router)
api_router.include_router(visitors_router)
api_router.include_router(announcements_router)

# Health (no auth)
api_router.include_router(health_router)

__all__ = ["api_router"]
