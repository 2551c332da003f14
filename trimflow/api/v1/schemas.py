from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from trimflow.domain.entities.booking import Booking, BookingStatus
from trimflow.domain.entities.dashboard import DashboardSnapshot, RevenueSummary
from trimflow.domain.entities.service import Service


class ServiceSchema(BaseModel):
    id: str
    name: str
    description: str
    duration_minutes: int
    price: Decimal

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            duration_minutes=service.duration_minutes,
            price=service.price,
        )


class ScheduleOptionsSchema(BaseModel):
    dates: list[date]
    time_labels: list[str]
    requires_deposit: bool
    deposit_amount: Decimal


class CreateBookingRequestSchema(BaseModel):
    service_id: str
    customer_name: str
    customer_phone: str
    booking_date: date
    time_label: str
    notes: str | None = None


class BookingSchema(BaseModel):
    id: str
    service_id: str
    service: ServiceSchema | None = None
    customer_name: str
    customer_phone: str
    booking_time: datetime
    status: BookingStatus
    notes: str | None = None
    contact_link: str | None = None

    @classmethod
    def from_entity(cls, booking: Booking, contact_link: str | None = None) -> "BookingSchema":
        return cls(
            id=booking.id,
            service_id=booking.service_id,
            service=ServiceSchema.from_entity(booking.service) if booking.service else None,
            customer_name=booking.customer_name,
            customer_phone=booking.customer_phone,
            booking_time=booking.booking_time,
            status=booking.status,
            notes=booking.notes,
            contact_link=contact_link,
        )


class CheckoutResponseSchema(BaseModel):
    url: str


class CredentialsSchema(BaseModel):
    email: str
    password: str = Field(min_length=1)


class SessionSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
    email: str
    expires_at: datetime | None = None


class RevenueSummarySchema(BaseModel):
    today_revenue: Decimal
    pending_count: int
    total_earned: Decimal

    @classmethod
    def from_entity(cls, summary: RevenueSummary) -> "RevenueSummarySchema":
        return cls(
            today_revenue=summary.today_revenue,
            pending_count=summary.pending_count,
            total_earned=summary.total_earned,
        )


class DashboardSchema(BaseModel):
    reference: datetime
    today: list[BookingSchema] = Field(default_factory=list)
    upcoming: list[BookingSchema] = Field(default_factory=list)
    completed: list[BookingSchema] = Field(default_factory=list)
    summary: RevenueSummarySchema

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot, reference: datetime, link_for) -> "DashboardSchema":
        def render(bookings: list[Booking]) -> list[BookingSchema]:
            return [BookingSchema.from_entity(b, contact_link=link_for(b)) for b in bookings]

        return cls(
            reference=reference,
            today=render(snapshot.queues.today),
            upcoming=render(snapshot.queues.upcoming),
            completed=render(snapshot.queues.completed),
            summary=RevenueSummarySchema.from_entity(snapshot.summary),
        )
