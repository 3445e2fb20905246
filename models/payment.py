# models/payment.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from models.common import CamelModel, normalize_timestamp
from models.enums import PaymentType


# -------------------------------------------------
# Ledger entry (immutable once written)
# -------------------------------------------------
class PaymentCreate(CamelModel):
    apartment_id: int
    amount: int = Field(..., gt=0)
    date: datetime
    type: PaymentType
    tenant_id: Optional[str] = None


class PaymentRead(CamelModel):
    id: int
    apartment_id: int
    tenant_id: str
    amount: int
    date: datetime
    type: PaymentType

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return normalize_timestamp(v)


# -------------------------------------------------
# Simulated UPI capture
# -------------------------------------------------
class UpiPaymentRequest(CamelModel):
    """
    upiId and amount are checked by the handler so a missing one yields
    "UPI ID and amount are required" rather than a field-level error.
    """
    upi_id: Optional[str] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    description: Optional[str] = None
    apartment_id: Optional[int] = None
    type: PaymentType = PaymentType.rent


class UpiPaymentResponse(CamelModel):
    success: bool
    payment: PaymentRead
