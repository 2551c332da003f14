from __future__ import annotations

import json
import logging

import stripe

from trimflow.application.dto.payment import CheckoutRequest, ProcessorEvent
from trimflow.application.exceptions import PaymentInitError, ValidationError
from trimflow.application.ports.payment_processor import PaymentProcessorPort
from trimflow.core.config import settings


class StripeCheckoutProcessor(PaymentProcessorPort):
    def __init__(
        self,
        api_key: str | None = None,
        webhook_secret: str | None = None,
        currency: str | None = None,
        payment_method_types: list[str] | None = None,
    ) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._webhook_secret = webhook_secret or settings.STRIPE_WEBHOOK_SECRET
        self._currency = (currency or settings.STRIPE_CURRENCY).lower()
        self._payment_method_types = payment_method_types or list(settings.STRIPE_PAYMENT_METHOD_TYPES)
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("STRIPE_SECRET_KEY is required for Stripe checkout")

    def create_checkout_session(self, request: CheckoutRequest) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                payment_method_types=self._payment_method_types,
                line_items=[
                    {
                        "price_data": {
                            "currency": self._currency,
                            "product_data": {
                                "name": f"Deposit for {request.service_name}",
                                "description": f"Booking confirmation deposit for {request.customer_name}",
                            },
                            "unit_amount": request.amount_minor,
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                metadata={**request.metadata, "booking_id": request.booking_id},
                success_url=request.success_url,
                cancel_url=request.cancel_url,
            )
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            self._logger.error(
                "Error creating Stripe checkout session",
                extra={"booking_id": request.booking_id, "error": message},
            )
            raise PaymentInitError(message) from e

        if not session.url:
            raise PaymentInitError("Stripe returned a session without a redirect URL")

        self._logger.info(
            "Stripe checkout session created",
            extra={"booking_id": request.booking_id, "amount": request.amount_minor},
        )
        return session.url

    def session_paid(self, session_id: str, booking_id: str) -> bool:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self._api_key)
        except stripe.InvalidRequestError as e:
            self._logger.warning(
                "Unknown Stripe checkout session",
                extra={"booking_id": booking_id, "error": str(e)},
            )
            return False
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            self._logger.error(
                "Error retrieving Stripe checkout session",
                extra={"booking_id": booking_id, "error": message},
            )
            raise PaymentInitError(message) from e

        metadata = session.metadata or {}
        return session.payment_status == "paid" and metadata.get("booking_id") == booking_id

    def parse_event(self, payload: bytes, signature: str | None) -> ProcessorEvent:
        if not self._webhook_secret:
            raise ValidationError("STRIPE_WEBHOOK_SECRET is not configured")
        if not signature:
            raise ValidationError("Missing Stripe-Signature header")

        try:
            stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except stripe.SignatureVerificationError as e:
            self._logger.warning("Stripe signature verification failed", extra={"error": str(e)})
            raise ValidationError("Invalid Stripe signature") from e
        except ValueError as e:
            raise ValidationError(f"Invalid Stripe payload: {e}") from e

        return ProcessorEvent.from_checkout_payload(json.loads(payload.decode("utf-8")))
