"""
Payment Reconciler
Confirms a checkout session with the provider and propagates the outcome
into the payments and bookings collections.
"""

import logging

from travelio.core.errors import BadRequestError
from travelio.models.common import serialize_document
from travelio.models.payment import Payment, ReconciliationOutcome, ReconciliationResult

logger = logging.getLogger(__name__)

PAID = "paid"


class PaymentReconciler:
    """
    confirm() is safe to call any number of times for the same session.

    Order of writes matters: the payment is inserted before the booking is
    touched, so a retry after a crash between the two still finds the
    payment and stops. The unique index on payments.transactionId settles
    concurrent confirmations.
    """

    def __init__(self, bookings, payments, provider):
        self.bookings = bookings
        self.payments = payments
        self.provider = provider

    async def confirm(self, session_id: str | None) -> ReconciliationResult:
        if not session_id:
            raise BadRequestError("Missing session_id")

        session = await self.provider.retrieve_session(session_id)
        transaction_id = session.payment_intent_id
        meta = session.metadata or {}

        if transaction_id:
            existing = await self.payments.find_by_transaction(transaction_id)
            if existing is not None:
                logger.info("Session %s already reconciled as %s", session_id, transaction_id)
                return self._already_recorded(transaction_id, existing)

        if session.payment_status != PAID:
            logger.info("Session %s not paid (status=%s)", session_id, session.payment_status)
            return ReconciliationResult(
                outcome=ReconciliationOutcome.NOT_PAID,
                success=False,
                message="Payment not completed",
                transaction_id=transaction_id,
            )

        if not transaction_id:
            raise BadRequestError("Paid session carries no payment intent")

        booking_id = meta.get("bookingId") or ""
        payment = Payment(
            transaction_id=transaction_id,
            booking_id=booking_id,
            tour_id=meta.get("tourId") or "",
            user_email=meta.get("userEmail") or session.customer_email,
            amount=session.amount_total,
            currency=session.currency,
            payment_status=session.payment_status,
        )
        stored, created = await self.payments.insert_once(payment.to_document())
        if not created:
            return self._already_recorded(transaction_id, stored)
        logger.info("Recorded payment %s for booking %s", transaction_id, booking_id or "-")

        booking = None
        if booking_id:
            booking = await self.bookings.update(
                booking_id,
                {
                    "paymentStatus": "paid",
                    "status": "confirmed",
                    "transactionId": transaction_id,
                },
            )
            if booking is None:
                logger.warning("Payment %s references unknown booking %s", transaction_id, booking_id)

        return ReconciliationResult(
            outcome=ReconciliationOutcome.CONFIRMED,
            success=True,
            message="Payment confirmed",
            transaction_id=transaction_id,
            payment_id=str(stored["_id"]),
            booking_id=booking_id or None,
            booking=serialize_document(booking),
            payment=serialize_document(stored),
        )

    @staticmethod
    def _already_recorded(transaction_id: str, payment: dict | None) -> ReconciliationResult:
        return ReconciliationResult(
            outcome=ReconciliationOutcome.ALREADY_RECORDED,
            success=True,
            message="already exists",
            transaction_id=transaction_id,
            payment_id=str(payment["_id"]) if payment else None,
            booking_id=(payment or {}).get("bookingId") or None,
            payment=serialize_document(payment),
        )
