"""
Payment Router
Stripe checkout creation and the success-page confirmation callback
"""

from fastapi import APIRouter, Depends, Query

from travelio.core.deps import get_checkout_initiator, get_payment_reconciler
from travelio.models.common import APIResponse
from travelio.models.payment import CheckoutRequest, CheckoutResponse
from travelio.services import CheckoutInitiator, PaymentReconciler

router = APIRouter(tags=["Payments"])


@router.post("/create-checkout-session", response_model=APIResponse)
async def create_checkout_session(
    body: CheckoutRequest,
    initiator: CheckoutInitiator = Depends(get_checkout_initiator),
):
    """
    Open a hosted checkout session for an existing booking and return the
    URL the client should redirect to.
    """
    url = await initiator.initiate(body.booking_id)
    return APIResponse(code=0, msg="ok", data=CheckoutResponse(url=url).to_document())


@router.get("/booking-success", response_model=APIResponse)
async def booking_success(
    session_id: str | None = Query(None, description="Checkout session id from the success redirect"),
    reconciler: PaymentReconciler = Depends(get_payment_reconciler),
):
    """
    Confirm a checkout session: record the payment once and mark the booking
    paid/confirmed. Safe to call repeatedly (page reloads, retries).
    """
    result = await reconciler.confirm(session_id)
    return APIResponse(code=0, msg=result.message, data=result.to_document(mode="json"))
