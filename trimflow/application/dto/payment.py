from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Stripe replaces this in the success URL with the id of the completed session
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutRequest(BaseModel):
    booking_id: str
    service_name: str
    customer_name: str
    amount_minor: int = Field(gt=0)  # smallest currency unit
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = Field(default_factory=dict)


class ProcessorEvent(BaseModel):
    type: str
    session_id: str | None = None
    booking_id: str | None = None
    paid: bool = False

    @classmethod
    def from_checkout_payload(cls, payload: dict[str, Any]) -> "ProcessorEvent":
        obj = ((payload.get("data") or {}).get("object")) or {}
        metadata = obj.get("metadata") or {}
        return cls(
            type=str(payload.get("type") or ""),
            session_id=obj.get("id"),
            booking_id=metadata.get("booking_id"),
            paid=obj.get("payment_status") == "paid",
        )


class PaymentReturnDTO(BaseModel):
    success: bool = False
    canceled: bool = False
    booking_id: str | None = None
    session_id: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.success and not self.canceled
