from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlencode

from trimflow.application.exceptions import PaymentInitError, ValidationError
from trimflow.application.dto.payment import SESSION_ID_PLACEHOLDER, CheckoutRequest
from trimflow.application.ports.payment_processor import PaymentProcessorPort
from trimflow.application.use_cases.booking_lifecycle import BookingLifecycleUseCase
from trimflow.domain.entities.booking import Booking

CHECKOUT_COMPLETED_EVENT = "checkout.session.completed"


def to_minor_units(amount: Decimal | int | float | str) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class DepositPaymentUseCase:
    def __init__(
        self,
        processor: PaymentProcessorPort,
        lifecycle: BookingLifecycleUseCase,
        return_url: str,
    ) -> None:
        self._processor = processor
        self._lifecycle = lifecycle
        self._return_url = return_url
        self._logger = logging.getLogger(__name__)

    def begin_deposit(
        self,
        booking_id: str,
        service_name: str,
        customer_name: str,
        amount: Decimal | int | float | str,
    ) -> str:
        """
        Open a hosted payment session for the deposit and return its redirect URL.

        On PaymentInitError the booking is left in awaiting_payment so the
        customer can retry.
        """
        if not booking_id:
            raise ValidationError("Missing booking ID")
        amount_minor = to_minor_units(amount)
        if amount_minor <= 0:
            raise ValidationError(f"Invalid deposit amount: {amount}")

        success_url = self._build_return_url(success="true", booking_id=booking_id)
        success_url += f"&session_id={SESSION_ID_PLACEHOLDER}"

        request = CheckoutRequest(
            booking_id=booking_id,
            service_name=service_name,
            customer_name=customer_name,
            amount_minor=amount_minor,
            success_url=success_url,
            cancel_url=self._build_return_url(canceled="true", booking_id=booking_id),
            metadata={"booking_id": booking_id},
        )

        try:
            url = self._processor.create_checkout_session(request)
        except PaymentInitError as e:
            self._logger.error("Payment session failed", extra={"booking_id": booking_id, "error": str(e)})
            raise

        self._logger.info("Payment session created", extra={"booking_id": booking_id, "amount": amount_minor})
        return url

    def on_return(self, booking_id: str, succeeded: bool, session_id: str | None = None) -> Booking | None:
        """
        Apply a payment return. Safe to call any number of times for the same booking.

        When the return carries a processor session id, the session must be
        paid and belong to the booking before payment is confirmed.
        """
        if not succeeded:
            self._logger.info("Payment not completed", extra={"booking_id": booking_id, "reason": "canceled"})
            return None
        if session_id is not None and not self._processor.session_paid(session_id, booking_id):
            self._logger.warning(
                "Payment return not confirmed by processor",
                extra={"booking_id": booking_id, "reason": session_id},
            )
            return None
        return self._lifecycle.confirm_payment(booking_id)

    def handle_processor_event(self, payload: bytes, signature: str | None) -> Booking | None:
        event = self._processor.parse_event(payload, signature)
        if event.type != CHECKOUT_COMPLETED_EVENT:
            self._logger.info("Ignoring processor event", extra={"reason": event.type})
            return None
        if not event.booking_id:
            self._logger.warning("Processor event without booking id", extra={"reason": event.session_id})
            return None
        return self.on_return(event.booking_id, event.paid)

    def _build_return_url(self, **params: str) -> str:
        return f"{self._return_url}?{urlencode(params)}"
