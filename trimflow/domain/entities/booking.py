from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from trimflow.domain.entities.service import Service


class BookingStatus(str, Enum):
    AWAITING_PAYMENT = "awaiting_payment"
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def can_transition_to(self, target: "BookingStatus") -> bool:
        return target in ALLOWED_TRANSITIONS.get(self, frozenset())


TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.AWAITING_PAYMENT: frozenset({BookingStatus.PENDING}),
    BookingStatus.PENDING: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class NewBooking:
    service_id: str
    customer_name: str
    customer_phone: str
    booking_time: datetime
    status: BookingStatus
    notes: str | None = None


@dataclass(frozen=True)
class Booking:
    id: str
    service_id: str
    customer_name: str
    customer_phone: str
    booking_time: datetime
    status: BookingStatus
    notes: str | None = None
    created_at: datetime | None = None
    # resolved from service_id at read time, None when the service is gone
    service: Service | None = None

    def with_status(self, status: BookingStatus) -> "Booking":
        return replace(self, status=status)
