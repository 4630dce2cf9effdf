"""
Stripe Checkout client
"""

import logging
from dataclasses import dataclass, field

import stripe

from travelio.core.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class LineItem:
    name: str
    unit_amount: int  # minor units
    currency: str
    quantity: int = 1


@dataclass
class CheckoutSession:
    """Provider-neutral view of a checkout session."""

    id: str
    url: str | None = None
    payment_intent_id: str | None = None
    amount_total: int | None = None
    currency: str | None = None
    payment_status: str | None = None
    customer_email: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


def _as_dict(obj) -> dict:
    if obj is None:
        return {}
    to_dict = getattr(obj, "to_dict", None)
    return to_dict() if callable(to_dict) else dict(obj)


def _session_from_stripe(session) -> CheckoutSession:
    intent = getattr(session, "payment_intent", None)
    # payment_intent may come back expanded
    if intent is not None and not isinstance(intent, str):
        intent = getattr(intent, "id", None)
    details = getattr(session, "customer_details", None)
    return CheckoutSession(
        id=session.id,
        url=getattr(session, "url", None),
        payment_intent_id=intent,
        amount_total=getattr(session, "amount_total", None),
        currency=getattr(session, "currency", None),
        payment_status=getattr(session, "payment_status", None),
        customer_email=getattr(session, "customer_email", None) or getattr(details, "email", None),
        metadata={k: str(v) for k, v in _as_dict(getattr(session, "metadata", None)).items()},
    )


class StripePaymentProvider:
    """
    Thin async wrapper over Stripe Checkout Sessions.

    Every Stripe failure is reported as UpstreamError; nothing is retried
    here.
    """

    def __init__(self, api_key: str | None):
        self.api_key = api_key

    async def create_session(
        self,
        line_item: LineItem,
        customer_email: str | None,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        if not self.api_key:
            raise UpstreamError("STRIPE_SECRET_KEY is not configured")
        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self.api_key,
                payment_method_types=["card"],
                mode="payment",
                customer_email=customer_email or None,
                line_items=[
                    {
                        "price_data": {
                            "currency": line_item.currency,
                            "unit_amount": line_item.unit_amount,
                            "product_data": {"name": line_item.name},
                        },
                        "quantity": line_item.quantity,
                    }
                ],
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout session creation failed: %s", e)
            raise UpstreamError("Failed to create checkout session") from e

        logger.info("Created checkout session %s", session.id)
        return _session_from_stripe(session)

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        if not self.api_key:
            raise UpstreamError("STRIPE_SECRET_KEY is not configured")
        try:
            session = await stripe.checkout.Session.retrieve_async(session_id, api_key=self.api_key)
        except stripe.StripeError as e:
            # unknown session ids arrive here as InvalidRequestError
            logger.error("Stripe session %s retrieval failed: %s", session_id, e)
            raise UpstreamError("Failed to retrieve checkout session") from e

        return _session_from_stripe(session)
