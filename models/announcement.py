# models/announcement.py

from datetime import datetime

from pydantic import Field, field_validator

from models.common import CamelModel, normalize_timestamp


class AnnouncementCreate(CamelModel):
    """createdBy is always the authenticated user; a body value is ignored."""
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    important: bool = False


class AnnouncementRead(AnnouncementCreate):
    id: int
    created_by: str
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v):
        return normalize_timestamp(v)
