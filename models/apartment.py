# models/apartment.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator

from models.common import CamelModel, normalize_timestamp, reject_null
from models.enums import ApartmentStatus


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class ApartmentBase(CamelModel):
    number: str = Field(..., min_length=1)
    building: str = Field(..., min_length=1)
    society_name: str = Field(..., min_length=1)
    rent: int = Field(..., ge=0)
    area: int = Field(..., gt=0, description="Carpet area in square feet")

    tenant_id: Optional[str] = None
    owner_id: Optional[str] = None
    status: ApartmentStatus = ApartmentStatus.vacant
    amenities: Optional[List[str]] = None
    last_maintenance_date: Optional[datetime] = None


# -------------------------------------------------
# Create
# -------------------------------------------------
class ApartmentCreate(ApartmentBase):
    """
    Status is stored as given; it is not derived from tenant_id.
    Callers assigning a tenant also set status=occupied.
    """
    pass


# -------------------------------------------------
# Update (PATCH): every field optional, validated one by one
# -------------------------------------------------
class ApartmentUpdate(CamelModel):
    number: Optional[str] = Field(None, min_length=1)
    building: Optional[str] = Field(None, min_length=1)
    society_name: Optional[str] = Field(None, min_length=1)
    rent: Optional[int] = Field(None, ge=0)
    area: Optional[int] = Field(None, gt=0)

    # nullable columns: an explicit null unassigns
    tenant_id: Optional[str] = None
    owner_id: Optional[str] = None
    status: Optional[ApartmentStatus] = None
    amenities: Optional[List[str]] = None
    last_maintenance_date: Optional[datetime] = None

    @field_validator("number", "building", "society_name", "rent", "area", "status")
    @classmethod
    def required_columns_not_null(cls, v, info: ValidationInfo):
        return reject_null(info.field_name, v)


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class ApartmentRead(ApartmentBase):
    id: int

    @field_validator("last_maintenance_date", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return normalize_timestamp(v)
