"""
Checkout Initiator
Turns an existing booking into a hosted checkout session
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from travelio.core.errors import BadRequestError, InvalidAmountError, NotFoundError
from travelio.services.payment_provider import LineItem

logger = logging.getLogger(__name__)


def _to_decimal(value) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError()
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError() from e
    if not amount.is_finite():
        raise InvalidAmountError()
    return amount


def derive_charge_amount(booking: dict) -> int:
    """
    Charge for a booking in minor units (cents).

    Preference order: finalPrice, then originalTotal, then
    pricePerPerson x guests (guests falls back to numberOfGuests, then 1).
    Zero, negative and non-numeric amounts raise InvalidAmountError.
    """
    price = booking.get("finalPrice") or booking.get("originalTotal")
    if price:
        major = _to_decimal(price)
    else:
        guests = booking.get("guests") or booking.get("numberOfGuests") or 1
        major = _to_decimal(booking.get("pricePerPerson")) * _to_decimal(guests)

    cents = int((major * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents <= 0:
        raise InvalidAmountError()
    return cents


class CheckoutInitiator:
    """
    Creates one provider checkout session per call for a booking.

    There is no idempotency key: calling twice for the same booking opens
    two live sessions. The booking itself is never modified here.
    """

    def __init__(self, bookings, provider, currency: str, site_domain: str):
        self.bookings = bookings
        self.provider = provider
        self.currency = currency
        self.site_domain = site_domain.rstrip("/")

    async def initiate(self, booking_id: str | None) -> str:
        if not booking_id:
            raise BadRequestError("bookingId is required")

        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")

        amount = derive_charge_amount(booking)

        session = await self.provider.create_session(
            line_item=LineItem(
                name=booking.get("tourTitle") or "Tour Booking",
                unit_amount=amount,
                currency=self.currency,
            ),
            customer_email=booking.get("userEmail"),
            metadata={
                "bookingId": str(booking["_id"]),
                "tourId": str(booking.get("tourId") or ""),
                "userEmail": booking.get("userEmail") or "",
            },
            success_url=f"{self.site_domain}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self.site_domain}/dashboard/my-booking",
        )
        logger.info("Checkout session %s opened for booking %s (%s %s)", session.id, booking_id, amount, self.currency)
        return session.url
