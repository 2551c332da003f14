from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from trimflow.application.exceptions import InvalidTransition, NotFound, ValidationError
from trimflow.application.ports.booking_store import BookingStorePort
from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.domain.entities.booking import Booking, BookingStatus, NewBooking


class BookingLifecycleUseCase:
    """Sole writer of booking status. Every status write is a compare-and-swap."""

    def __init__(
        self,
        store: BookingStorePort,
        catalog: ServiceCatalogPort,
        timezone: ZoneInfo,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def create(
        self,
        service_id: str,
        customer_name: str,
        customer_phone: str,
        at: datetime,
        requires_deposit: bool,
        notes: str | None = None,
    ) -> Booking:
        name = (customer_name or "").strip()
        phone = (customer_phone or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        if not phone:
            raise ValidationError("Customer phone is required")

        if not service_id or self._catalog.get_service(service_id) is None:
            raise NotFound(f"Service not found: {service_id}")

        if at.tzinfo is None:
            at = at.replace(tzinfo=self._timezone)

        status = BookingStatus.AWAITING_PAYMENT if requires_deposit else BookingStatus.PENDING
        booking = self._store.create(
            NewBooking(
                service_id=service_id,
                customer_name=name,
                customer_phone=phone,
                booking_time=at,
                status=status,
                notes=(notes or "").strip() or None,
            )
        )
        self._logger.info(
            "Booking created",
            extra={"booking_id": booking.id, "service_id": service_id, "status": status.value},
        )
        return booking

    def get(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise NotFound(f"Booking not found: {booking_id}")
        return booking

    def confirm_payment(self, booking_id: str) -> Booking:
        """
        Move awaiting_payment -> pending.

        Idempotent: on any other status the booking is returned unchanged,
        so replayed payment redirects and duplicate notifications are harmless.
        """
        booking = self.get(booking_id)
        if booking.status != BookingStatus.AWAITING_PAYMENT:
            self._logger.info(
                "Payment already applied",
                extra={"booking_id": booking_id, "status": booking.status.value},
            )
            return booking

        updated = self._store.update_status(
            booking_id, BookingStatus.AWAITING_PAYMENT, BookingStatus.PENDING
        )
        if updated is None:
            # lost the race to a concurrent confirmation
            return self.get(booking_id)

        self._logger.info("Payment confirmed", extra={"booking_id": booking_id, "status": updated.status.value})
        return updated

    def mark_completed(self, booking_id: str) -> Booking:
        return self._resolve(booking_id, BookingStatus.COMPLETED)

    def cancel(self, booking_id: str) -> Booking:
        return self._resolve(booking_id, BookingStatus.CANCELLED)

    def transition(self, booking_id: str, target: BookingStatus) -> Booking:
        if target == BookingStatus.PENDING:
            return self.confirm_payment(booking_id)
        if target in (BookingStatus.COMPLETED, BookingStatus.CANCELLED):
            return self._resolve(booking_id, target)
        booking = self.get(booking_id)
        raise InvalidTransition(booking_id, booking.status.value, target.value)

    def _resolve(self, booking_id: str, target: BookingStatus) -> Booking:
        booking = self.get(booking_id)
        if not booking.status.can_transition_to(target):
            self._logger.warning(
                "Rejected status change",
                extra={"booking_id": booking_id, "status": booking.status.value, "reason": f"to {target.value}"},
            )
            raise InvalidTransition(booking_id, booking.status.value, target.value)

        updated = self._store.update_status(booking_id, booking.status, target)
        if updated is None:
            current = self.get(booking_id)
            raise InvalidTransition(booking_id, current.status.value, target.value)

        self._logger.info("Booking resolved", extra={"booking_id": booking_id, "status": target.value})
        return updated
