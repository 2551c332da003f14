from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

from trimflow.domain.entities.booking import Booking, BookingStatus
from trimflow.domain.entities.dashboard import RevenueSummary, ScheduleQueues


def local_day(moment: datetime, reference: datetime) -> date:
    """Calendar day of `moment` as seen from the timezone of `reference`."""
    if moment.tzinfo is not None and reference.tzinfo is not None:
        return moment.astimezone(reference.tzinfo).date()
    return moment.date()


def service_price(booking: Booking) -> Decimal:
    if booking.service is None:
        return Decimal("0")
    return booking.service.price


def partition(bookings: Iterable[Booking], reference: datetime) -> ScheduleQueues:
    """
    Split bookings into the operator's queues.

    today/upcoming hold pending bookings only; awaiting_payment and cancelled
    bookings are in no queue, nor are pending bookings from past days.
    """
    today_date = local_day(reference, reference)
    ordered = sorted(bookings, key=lambda b: b.booking_time)

    today: list[Booking] = []
    upcoming: list[Booking] = []
    completed: list[Booking] = []

    for booking in ordered:
        if booking.status == BookingStatus.COMPLETED:
            completed.append(booking)
            continue
        if booking.status != BookingStatus.PENDING:
            continue

        day = local_day(booking.booking_time, reference)
        if day == today_date:
            today.append(booking)
        elif day > today_date:
            upcoming.append(booking)

    return ScheduleQueues(today=today, upcoming=upcoming, completed=completed)


def aggregate(bookings: Iterable[Booking], reference: datetime) -> RevenueSummary:
    today_date = local_day(reference, reference)
    today_revenue = Decimal("0")
    total_earned = Decimal("0")
    pending_count = 0

    for booking in bookings:
        is_today = local_day(booking.booking_time, reference) == today_date
        if booking.status == BookingStatus.COMPLETED:
            price = service_price(booking)
            total_earned += price
            if is_today:
                today_revenue += price
        elif booking.status == BookingStatus.PENDING and is_today:
            pending_count += 1

    return RevenueSummary(
        today_revenue=today_revenue,
        pending_count=pending_count,
        total_earned=total_earned,
    )
