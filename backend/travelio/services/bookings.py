"""
Booking CRUD
"""

import logging

from travelio.core.errors import BadRequestError, NotFoundError
from travelio.models.booking import REQUIRED_BOOKING_FIELDS, Booking, BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, bookings):
        self.bookings = bookings

    async def list(self, email: str | None = None, status: str | None = None, user_id: str | None = None) -> list[dict]:
        query = {}
        if email:
            query["userEmail"] = email
        if status:
            query["status"] = status
        if user_id:
            query["userId"] = user_id
        return await self.bookings.find(query)

    async def get(self, booking_id: str) -> dict:
        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    async def create(self, payload: BookingCreate) -> str:
        missing = [name for name in REQUIRED_BOOKING_FIELDS if not getattr(payload, name)]
        if missing:
            raise BadRequestError(
                "Missing required fields: tourId, userEmail, and travelDate are required"
            )

        document = Booking(**payload.model_dump()).to_document(exclude_none=True)
        inserted_id = await self.bookings.insert(document)
        logger.info("Created booking %s for %s", inserted_id, payload.user_email)
        return str(inserted_id)

    async def update(self, booking_id: str, payload: BookingUpdate) -> dict:
        fields = payload.to_document(exclude_unset=True)
        if not fields:
            raise BadRequestError("No changes provided")

        booking = await self.bookings.update(booking_id, fields)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    async def delete(self, booking_id: str) -> None:
        if not await self.bookings.delete(booking_id):
            raise NotFoundError("Booking not found")
        logger.info("Deleted booking %s", booking_id)
