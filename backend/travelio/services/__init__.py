"""
Domain services: booking/user CRUD, checkout, reconciliation, dashboard
"""

from travelio.services.bookings import BookingService
from travelio.services.checkout import CheckoutInitiator, derive_charge_amount
from travelio.services.dashboard import DashboardAggregator
from travelio.services.reconciler import PaymentReconciler
from travelio.services.users import UserService

__all__ = [
    "BookingService",
    "CheckoutInitiator",
    "DashboardAggregator",
    "PaymentReconciler",
    "UserService",
    "derive_charge_amount",
]
