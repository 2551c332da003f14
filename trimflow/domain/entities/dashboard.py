from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from trimflow.domain.entities.booking import Booking


@dataclass(frozen=True)
class ScheduleQueues:
    today: list[Booking] = field(default_factory=list)
    upcoming: list[Booking] = field(default_factory=list)
    completed: list[Booking] = field(default_factory=list)


@dataclass(frozen=True)
class RevenueSummary:
    today_revenue: Decimal = Decimal("0")
    pending_count: int = 0
    total_earned: Decimal = Decimal("0")


@dataclass(frozen=True)
class DashboardSnapshot:
    bookings: list[Booking]
    queues: ScheduleQueues
    summary: RevenueSummary
