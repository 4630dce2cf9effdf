"""
Booking Router
CRUD over the bookings collection
"""

from fastapi import APIRouter, Depends, Query

from travelio.core.deps import get_booking_service
from travelio.models.booking import BookingCreate, BookingUpdate
from travelio.models.common import APIResponse, serialize_document
from travelio.services import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=APIResponse)
async def list_bookings(
    email: str | None = Query(None, description="Filter by userEmail"),
    status: str | None = Query(None, description="pending, confirmed or cancelled"),
    user_id: str | None = Query(None, alias="userId"),
    service: BookingService = Depends(get_booking_service),
):
    """
    All bookings, newest first, optionally filtered.
    """
    bookings = await service.list(email=email, status=status, user_id=user_id)
    return APIResponse(code=0, msg="ok", data=[serialize_document(b) for b in bookings])


@router.get("/{booking_id}", response_model=APIResponse)
async def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    booking = await service.get(booking_id)
    return APIResponse(code=0, msg="ok", data=serialize_document(booking))


@router.post("", status_code=201, response_model=APIResponse)
async def create_booking(body: BookingCreate, service: BookingService = Depends(get_booking_service)):
    """
    Create a booking. tourId, userEmail and travelDate are required;
    status starts as pending and paymentStatus as unpaid.
    """
    inserted_id = await service.create(body)
    return APIResponse(code=0, msg="ok", data={"insertedId": inserted_id})


@router.patch("/{booking_id}", response_model=APIResponse)
async def update_booking(
    booking_id: str,
    body: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.update(booking_id, body)
    return APIResponse(code=0, msg="ok", data=serialize_document(booking))


@router.delete("/{booking_id}", response_model=APIResponse)
async def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    await service.delete(booking_id)
    return APIResponse(code=0, msg="ok", data={"deletedId": booking_id})
