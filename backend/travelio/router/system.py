from fastapi import APIRouter

from travelio.models.common import APIResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=APIResponse)
def root():
    return APIResponse(code=0, msg="ok", data={"msg": "Happy Traveling! Travelio Booking API."})


@router.get("/health", response_model=APIResponse)
def health_check():
    return APIResponse(
        code=0, msg="ok", data={"status": "healthy", "service": "travelio-booking-server"}
    )
