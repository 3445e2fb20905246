# models/maintenance.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from models.common import CamelModel, normalize_timestamp
from models.enums import MaintenanceStatus


class MaintenanceRequestCreate(CamelModel):
    """
    Any `status` in the body is ignored; new tickets always start pending.
    `tenantId` defaults to the requesting user.
    """
    apartment_id: int
    description: str = Field(..., min_length=1)
    tenant_id: Optional[str] = None


class MaintenanceStatusUpdate(CamelModel):
    status: MaintenanceStatus


class MaintenanceRequestRead(CamelModel):
    id: int
    apartment_id: int
    tenant_id: str
    description: str
    status: MaintenanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return normalize_timestamp(v)
