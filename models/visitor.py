# models/visitor.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from models.common import CamelModel, normalize_timestamp
from models.enums import VisitorStatus


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class VisitorBase(CamelModel):
    name: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    contact_number: str = Field(..., min_length=1)
    apartment_id: int
    expected_at: datetime


# -------------------------------------------------
# Create
# -------------------------------------------------
class VisitorCreate(VisitorBase):
    """
    Status, approval flag and timestamps are not client-controlled:
    any such keys in the body are dropped and the visitor starts upcoming.
    """
    pass


# -------------------------------------------------
# Status change (PATCH /{id}/status)
# -------------------------------------------------
class VisitorStatusUpdate(CamelModel):
    status: VisitorStatus


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class VisitorRead(VisitorBase):
    id: int
    status: VisitorStatus
    pending_approval: bool = False
    approved_by: Optional[str] = None
    actual_entry_at: Optional[datetime] = None
    actual_exit_at: Optional[datetime] = None

    # Rows written before the column existed carry NULL
    @field_validator("pending_approval", mode="before")
    @classmethod
    def normalize_pending_approval(cls, v):
        return v is True

    @field_validator("expected_at", "actual_entry_at", "actual_exit_at", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return normalize_timestamp(v)


class VisitorActionResponse(CamelModel):
    success: bool
    message: str
    visitor: Optional[VisitorRead] = None
