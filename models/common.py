# models/common.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Wire format is camelCase (apartmentId, contactNumber, ...);
    Supabase columns are snake_case. Accept both, emit camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def normalize_timestamp(v) -> Optional[datetime]:
    """Parse trailing Z timestamps coming back from PostgREST."""
    if isinstance(v, str) and v.endswith("Z"):
        return v[:-1] + "+00:00"
    return v


def reject_null(field: str, v):
    if v is None:
        raise ValueError(f"{field} may not be null")
    return v
