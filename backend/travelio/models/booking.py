"""
Booking models for the bookings collection
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from travelio.models.common import CamelModel

BookingStatus = Literal["pending", "confirmed", "cancelled"]
BookingPaymentStatus = Literal["unpaid", "paid"]
# clients may only cancel; confirmation comes from payment reconciliation
ClientBookingStatus = Literal["cancelled"]

# tourId, userEmail and travelDate must be present and non-empty on creation
REQUIRED_BOOKING_FIELDS = ("tour_id", "user_email", "travel_date")


class BookingCreate(CamelModel):
    """
    Payload for POST /bookings.

    The required fields are optional here so that a missing one is reported
    as a 400 with a readable message rather than a schema error.
    """

    tour_id: str | None = Field(None, description="Tour being booked")
    tour_title: str | None = Field(None, description="Tour title, shown on the checkout page")
    user_id: str | None = None
    user_name: str | None = None
    user_email: str | None = Field(None, description="Email of the booking user")
    travel_date: str | None = Field(None, description="Travel date (YYYY-MM-DD)")
    guests: int | None = Field(None, ge=1)
    number_of_guests: int | None = Field(None, ge=1, description="Legacy alias of guests")
    price_per_person: float | None = Field(None, ge=0)
    original_total: float | None = Field(None, ge=0, description="Total before discounts")
    final_price: float | None = Field(None, ge=0, description="Total after discounts")
    special_requests: str | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "tourId": "6650c1f2a9b3f1d2c4e5a701",
                "tourTitle": "Sundarbans Mangrove Cruise",
                "userEmail": "traveler@example.com",
                "travelDate": "2025-12-20",
                "guests": 2,
                "pricePerPerson": 50,
            }
        }


class BookingUpdate(CamelModel):
    """
    Payload for PATCH /bookings/{id}.

    paymentStatus and transactionId are not editable here, and status can
    only be set to cancelled; payment reconciliation sets the rest.
    """

    tour_title: str | None = None
    user_name: str | None = None
    travel_date: str | None = None
    guests: int | None = Field(None, ge=1)
    number_of_guests: int | None = Field(None, ge=1)
    price_per_person: float | None = Field(None, ge=0)
    original_total: float | None = Field(None, ge=0)
    final_price: float | None = Field(None, ge=0)
    special_requests: str | None = None
    status: ClientBookingStatus | None = None


class Booking(BookingCreate):
    """
    Booking document as stored in MongoDB
    """

    status: BookingStatus = "pending"
    payment_status: BookingPaymentStatus = "unpaid"
    transaction_id: str | None = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
