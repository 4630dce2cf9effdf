"""
FastAPI dependencies

Long-lived clients live on app.state (set up in create_app/lifespan);
services are cheap and built per request on top of them.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from travelio.core import config
from travelio.core.errors import UnauthorizedError
from travelio.db.stores import Stores
from travelio.services import (
    BookingService,
    CheckoutInitiator,
    DashboardAggregator,
    PaymentReconciler,
    UserService,
)

security = HTTPBearer(auto_error=False)


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_booking_service(stores: Stores = Depends(get_stores)) -> BookingService:
    return BookingService(stores.bookings)


def get_user_service(stores: Stores = Depends(get_stores)) -> UserService:
    return UserService(stores.users)


def get_checkout_initiator(request: Request, stores: Stores = Depends(get_stores)) -> CheckoutInitiator:
    return CheckoutInitiator(
        stores.bookings,
        request.app.state.payment_provider,
        currency=config.PAYMENT_CURRENCY,
        site_domain=config.SITE_DOMAIN,
    )


def get_payment_reconciler(request: Request, stores: Stores = Depends(get_stores)) -> PaymentReconciler:
    return PaymentReconciler(stores.bookings, stores.payments, request.app.state.payment_provider)


def get_dashboard(stores: Stores = Depends(get_stores)) -> DashboardAggregator:
    return DashboardAggregator(stores.bookings, stores.payments, stores.users)


async def require_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Verify the bearer token and return the caller's email.
    """
    if credentials is None:
        raise UnauthorizedError()
    return await request.app.state.identity_verifier.verify(credentials.credentials)
