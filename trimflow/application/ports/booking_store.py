from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from trimflow.domain.entities.booking import Booking, BookingStatus, NewBooking


class BookingStorePort(ABC):
    @abstractmethod
    def create(self, record: NewBooking) -> Booking:
        """Persist a new booking in one write. Returns it with its id and resolved service."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self,
        booking_id: str,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> Booking | None:
        """
        Compare-and-swap the status of one booking.

        Writes `new` only if the stored status still equals `expected`.
        Returns the updated booking, or None when the record is missing or
        its status has moved on. Nothing else on the record is touched.
        """
        raise NotImplementedError

    @abstractmethod
    def query(self, statuses: Iterable[BookingStatus] | None = None) -> list[Booking]:
        """List bookings (optionally filtered by status) ordered by ascending booking_time."""
        raise NotImplementedError
