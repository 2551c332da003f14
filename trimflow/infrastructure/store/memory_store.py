from __future__ import annotations

import threading
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone

from trimflow.application.ports.booking_store import BookingStorePort
from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.domain.entities.booking import Booking, BookingStatus, NewBooking


class MemoryBookingStore(BookingStorePort):
    def __init__(self, catalog: ServiceCatalogPort) -> None:
        self._catalog = catalog
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def create(self, record: NewBooking) -> Booking:
        booking = Booking(
            id=str(uuid.uuid4()),
            service_id=record.service_id,
            customer_name=record.customer_name,
            customer_phone=record.customer_phone,
            booking_time=record.booking_time,
            status=record.status,
            notes=record.notes,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._bookings[booking.id] = booking
        return self._resolve(booking)

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            booking = self._bookings.get(booking_id)
        return self._resolve(booking) if booking else None

    def update_status(
        self,
        booking_id: str,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> Booking | None:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None or booking.status != expected:
                return None
            booking = booking.with_status(new)
            self._bookings[booking_id] = booking
        return self._resolve(booking)

    def query(self, statuses: Iterable[BookingStatus] | None = None) -> list[Booking]:
        wanted = set(statuses) if statuses is not None else None
        with self._lock:
            bookings = list(self._bookings.values())
        if wanted is not None:
            bookings = [b for b in bookings if b.status in wanted]
        bookings.sort(key=lambda b: b.booking_time)
        return [self._resolve(b) for b in bookings]

    def _resolve(self, booking: Booking) -> Booking:
        return replace(booking, service=self._catalog.get_service(booking.service_id))
