from __future__ import annotations

import json
import logging

from trimflow.application.dto.payment import SESSION_ID_PLACEHOLDER, CheckoutRequest, ProcessorEvent
from trimflow.application.exceptions import PaymentInitError, ValidationError
from trimflow.application.ports.payment_processor import PaymentProcessorPort


class MockPaymentProcessor(PaymentProcessorPort):
    """Dev processor: "pays" by redirecting straight to the success URL."""

    def __init__(self, fail_with: str | None = None) -> None:
        self.sessions: list[CheckoutRequest] = []
        self._paid: dict[str, str] = {}
        self._fail_with = fail_with
        self._logger = logging.getLogger(__name__)

    def create_checkout_session(self, request: CheckoutRequest) -> str:
        if self._fail_with:
            raise PaymentInitError(self._fail_with)
        self.sessions.append(request)
        session_id = f"mock_cs_{len(self.sessions)}"
        self._paid[session_id] = request.booking_id
        self._logger.info(
            "Mock checkout session created",
            extra={"booking_id": request.booking_id, "amount": request.amount_minor},
        )
        return request.success_url.replace(SESSION_ID_PLACEHOLDER, session_id)

    def session_paid(self, session_id: str, booking_id: str) -> bool:
        return self._paid.get(session_id) == booking_id

    def parse_event(self, payload: bytes, signature: str | None) -> ProcessorEvent:
        try:
            data = json.loads(payload.decode("utf-8")) if payload else {}
        except ValueError as e:
            raise ValidationError(f"Invalid event payload: {e}") from e
        return ProcessorEvent.from_checkout_payload(data)
