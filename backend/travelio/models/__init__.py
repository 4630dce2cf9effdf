"""
Models package for database schemas
"""

from travelio.models.booking import Booking, BookingCreate, BookingUpdate
from travelio.models.dashboard import ChartPoint, DashboardStats
from travelio.models.payment import Payment, ReconciliationOutcome, ReconciliationResult
from travelio.models.user import RoleUpdate, UserProfileUpdate, UserUpsert

__all__ = [
    "Booking",
    "BookingCreate",
    "BookingUpdate",
    "ChartPoint",
    "DashboardStats",
    "Payment",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "RoleUpdate",
    "UserProfileUpdate",
    "UserUpsert",
]
