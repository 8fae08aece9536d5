"""Payment admin API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentResponse(BaseModel):
    """Payment joined with user and payment method."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    user_name: str
    user_email: str
    amount: float
    currency: str
    status: str
    type: str
    payment_method: str
    date: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class PaymentStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_revenue: float
    success_rate: float
    average_amount: float
    refund_rate: float


class PaymentStatusUpdate(BaseModel):
    """Request body for PATCH /payments/{id}/status."""

    status: str = Field(..., min_length=1)
