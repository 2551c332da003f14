from __future__ import annotations

from abc import ABC, abstractmethod

from trimflow.application.dto.payment import CheckoutRequest, ProcessorEvent


class PaymentProcessorPort(ABC):
    @abstractmethod
    def create_checkout_session(self, request: CheckoutRequest) -> str:
        """
        Create a hosted payment session and return its redirect URL.

        The session metadata must carry `request.booking_id` so the return
        callback and processor notifications can locate the booking.
        Raises PaymentInitError with the processor's message on failure.
        """
        raise NotImplementedError

    @abstractmethod
    def parse_event(self, payload: bytes, signature: str | None) -> ProcessorEvent:
        """Verify and decode an out-of-band processor notification."""
        raise NotImplementedError

    @abstractmethod
    def session_paid(self, session_id: str, booking_id: str) -> bool:
        """
        True when the processor reports the session as paid and it was opened
        for `booking_id`. Raises PaymentInitError when the processor cannot be reached.
        """
        raise NotImplementedError
