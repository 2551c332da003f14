from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from trimflow.domain.entities.booking import Booking, BookingStatus, NewBooking
from trimflow.domain.entities.service import Service

SERVICE_COLUMNS = "id,name,description,duration_minutes,price"
BOOKING_SELECT = f"*,services({SERVICE_COLUMNS})"


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def service_from_row(row: dict[str, Any] | None) -> Service | None:
    if not row:
        return None
    return Service(
        id=str(row["id"]),
        name=row.get("name") or "",
        description=row.get("description") or "",
        duration_minutes=int(row.get("duration_minutes") or 0),
        price=Decimal(str(row.get("price") or 0)),
    )


def booking_from_row(row: dict[str, Any]) -> Booking:
    """Raises ValueError on an unknown status string."""
    booking_time = parse_timestamp(row.get("booking_time"))
    if booking_time is None:
        raise ValueError(f"Booking {row.get('id')} has no booking_time")
    return Booking(
        id=str(row["id"]),
        service_id=str(row.get("service_id")),
        customer_name=row.get("customer_name") or "",
        customer_phone=row.get("customer_phone") or "",
        booking_time=booking_time,
        status=BookingStatus(row.get("status")),
        notes=row.get("notes"),
        created_at=parse_timestamp(row.get("created_at")),
        service=service_from_row(row.get("services")),
    )


def booking_to_row(record: NewBooking) -> dict[str, Any]:
    return {
        "service_id": record.service_id,
        "customer_name": record.customer_name,
        "customer_phone": record.customer_phone,
        "booking_time": record.booking_time.isoformat(),
        "status": record.status.value,
        "notes": record.notes,
    }
