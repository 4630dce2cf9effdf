"""
Payment models for the payments collection and the checkout flow
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from travelio.models.common import CamelModel


class Payment(CamelModel):
    """
    Payment document as stored in MongoDB.
    One document per provider transaction (unique index on transactionId).
    """

    transaction_id: str = Field(..., description="Provider payment-intent id")
    booking_id: str = ""
    tour_id: str = ""
    user_email: str | None = None
    amount: int | None = Field(None, description="Amount in minor currency units (cents)")
    currency: str | None = None
    payment_status: str = Field(..., description="Provider payment status at capture time")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CheckoutRequest(CamelModel):
    booking_id: str | None = None


class CheckoutResponse(CamelModel):
    url: str


class ReconciliationOutcome(str, Enum):
    ALREADY_RECORDED = "already_recorded"
    CONFIRMED = "confirmed"
    NOT_PAID = "not_paid"


class ReconciliationResult(CamelModel):
    """
    Result of confirming a checkout session.
    """

    outcome: ReconciliationOutcome
    success: bool
    message: str
    transaction_id: str | None = None
    payment_id: str | None = None
    booking_id: str | None = None
    booking: dict[str, Any] | None = None
    payment: dict[str, Any] | None = None
