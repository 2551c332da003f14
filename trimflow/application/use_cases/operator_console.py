from __future__ import annotations

import logging
from datetime import datetime

from trimflow.application.exceptions import AuthenticationError, InvalidTransition
from trimflow.application.ports.booking_store import BookingStorePort
from trimflow.application.use_cases.booking_lifecycle import BookingLifecycleUseCase
from trimflow.application.utils.contact_links import whatsapp_link
from trimflow.application.utils.schedule_views import aggregate, partition
from trimflow.domain.entities.booking import Booking, BookingStatus
from trimflow.domain.entities.dashboard import DashboardSnapshot, RevenueSummary, ScheduleQueues
from trimflow.domain.entities.operator import OperatorSession


class OperatorConsoleUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        lifecycle: BookingLifecycleUseCase,
        business_name: str = "",
    ) -> None:
        self._store = store
        self._lifecycle = lifecycle
        self._business_name = business_name
        self._logger = logging.getLogger(__name__)

    def list_bookings(self, operator: OperatorSession | None) -> list[Booking]:
        self._require_operator(operator)
        return self._store.query()

    def queues(self, operator: OperatorSession | None, reference: datetime) -> ScheduleQueues:
        return partition(self.list_bookings(operator), reference)

    def summary(self, operator: OperatorSession | None, reference: datetime) -> RevenueSummary:
        return aggregate(self.list_bookings(operator), reference)

    def dashboard(self, operator: OperatorSession | None, reference: datetime) -> DashboardSnapshot:
        """Full re-query of the datastore, then every derived view from that one snapshot."""
        bookings = self.list_bookings(operator)
        return DashboardSnapshot(
            bookings=bookings,
            queues=partition(bookings, reference),
            summary=aggregate(bookings, reference),
        )

    def transition(
        self,
        operator: OperatorSession | None,
        booking_id: str,
        new_status: BookingStatus,
    ) -> Booking:
        self._require_operator(operator)
        self._logger.info(
            "Operator status change",
            extra={"booking_id": booking_id, "status": new_status.value, "reason": operator.email},
        )
        if new_status == BookingStatus.COMPLETED:
            return self._lifecycle.mark_completed(booking_id)
        if new_status == BookingStatus.CANCELLED:
            return self._lifecycle.cancel(booking_id)
        booking = self._lifecycle.get(booking_id)
        raise InvalidTransition(booking_id, booking.status.value, new_status.value)

    def contact_link(self, operator: OperatorSession | None, booking: Booking) -> str | None:
        self._require_operator(operator)
        service_name = booking.service.name if booking.service else "appointment"
        message = f"Hi {booking.customer_name}, this is {self._business_name or 'us'} about your {service_name}."
        return whatsapp_link(booking.customer_phone, message)

    def _require_operator(self, operator: OperatorSession | None) -> None:
        if operator is None:
            raise AuthenticationError("Operator session required")
