"""
Dashboard Aggregator
Read-only statistics computed from the collections at call time
"""

from collections import Counter
from datetime import datetime

from travelio.models.common import serialize_document
from travelio.models.dashboard import ChartPoint, DashboardStats

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
RECENT_BOOKINGS = 6
CHART_MONTHS = 6


def _as_datetime(value) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def monthly_booking_counts(created_at_values, months: int = CHART_MONTHS) -> list[ChartPoint]:
    """
    Bucket creation timestamps by calendar month and keep the latest
    `months` buckets that have at least one booking. Empty months are not
    filled in, so the window can span more than `months` calendar months.
    """
    buckets = Counter()
    for value in created_at_values:
        created = _as_datetime(value)
        if created is None:
            continue
        buckets[(created.year, created.month)] += 1

    latest = sorted(buckets.items())[-months:]
    return [
        ChartPoint(name=f"{MONTH_NAMES[month - 1]} {str(year)[-2:]}", bookings=count)
        for (year, month), count in latest
    ]


class DashboardAggregator:
    def __init__(self, bookings, payments, users):
        self.bookings = bookings
        self.payments = payments
        self.users = users

    async def stats(self) -> DashboardStats:
        recent = await self.bookings.find(limit=RECENT_BOOKINGS)
        return DashboardStats(
            total_bookings=await self.bookings.count(),
            confirmed=await self.bookings.count({"status": "confirmed"}),
            pending=await self.bookings.count({"status": "pending"}),
            cancelled=await self.bookings.count({"status": "cancelled"}),
            total_revenue=await self.payments.total_amount(),
            total_users=await self.users.count(),
            recent_bookings=[serialize_document(b) for b in recent],
            booking_chart_data=monthly_booking_counts(await self.bookings.creation_dates()),
        )
