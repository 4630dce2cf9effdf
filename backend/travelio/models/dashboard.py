from typing import Any

from travelio.models.common import CamelModel


class ChartPoint(CamelModel):
    name: str
    bookings: int


class DashboardStats(CamelModel):
    total_bookings: int
    confirmed: int
    pending: int
    cancelled: int
    total_revenue: int  # cents
    total_users: int
    recent_bookings: list[dict[str, Any]]
    booking_chart_data: list[ChartPoint]
