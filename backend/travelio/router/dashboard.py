from fastapi import APIRouter, Depends

from travelio.core.deps import get_dashboard
from travelio.models.common import APIResponse
from travelio.services import DashboardAggregator

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard-stats", response_model=APIResponse)
async def dashboard_stats(dashboard: DashboardAggregator = Depends(get_dashboard)):
    """
    Booking counts by status, user count, revenue in cents, the latest
    bookings and a monthly booking chart.
    """
    stats = await dashboard.stats()
    return APIResponse(code=0, msg="ok", data=stats.to_document(mode="json"))
