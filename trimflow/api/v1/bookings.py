from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException

from trimflow.api.v1.schemas import (
    BookingSchema,
    CheckoutResponseSchema,
    CreateBookingRequestSchema,
    ScheduleOptionsSchema,
    ServiceSchema,
)
from trimflow.application.exceptions import (
    NotFound,
    PaymentInitError,
    StoreError,
    ValidationError,
)
from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.application.use_cases.booking_lifecycle import BookingLifecycleUseCase
from trimflow.application.use_cases.deposit_payment import DepositPaymentUseCase
from trimflow.application.utils.scheduling import (
    ensure_bookable_date,
    offered_dates,
    offered_time_labels,
    to_point_in_time,
)
from trimflow.core.config import settings
from trimflow.domain.entities.booking import BookingStatus
from trimflow.wiring.dependencies import (
    get_booking_lifecycle_use_case,
    get_deposit_payment_use_case,
    get_now,
    get_requires_deposit,
    get_service_catalog,
    get_timezone,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/services", response_model=list[ServiceSchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    try:
        return [ServiceSchema.from_entity(s) for s in catalog.list_services()]
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/schedule/options", response_model=ScheduleOptionsSchema)
def schedule_options(
    now: datetime = Depends(get_now),
    requires_deposit: bool = Depends(get_requires_deposit),
):
    return ScheduleOptionsSchema(
        dates=offered_dates(now.date(), settings.BOOKING_WINDOW_DAYS),
        time_labels=list(offered_time_labels()),
        requires_deposit=requires_deposit,
        deposit_amount=settings.DEPOSIT_AMOUNT,
    )


@router.post("/bookings", response_model=BookingSchema, status_code=201)
def create_booking(
    req: CreateBookingRequestSchema,
    uc: BookingLifecycleUseCase = Depends(get_booking_lifecycle_use_case),
    now: datetime = Depends(get_now),
    tz: ZoneInfo = Depends(get_timezone),
    requires_deposit: bool = Depends(get_requires_deposit),
):
    try:
        ensure_bookable_date(req.booking_date, now.date())
        at = to_point_in_time(req.booking_date, req.time_label, tz)
        booking = uc.create(
            service_id=req.service_id,
            customer_name=req.customer_name,
            customer_phone=req.customer_phone,
            at=at,
            requires_deposit=requires_deposit,
            notes=req.notes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return BookingSchema.from_entity(booking)


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: str,
    uc: BookingLifecycleUseCase = Depends(get_booking_lifecycle_use_case),
):
    try:
        return BookingSchema.from_entity(uc.get(booking_id))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/bookings/{booking_id}/checkout", response_model=CheckoutResponseSchema)
def begin_checkout(
    booking_id: str,
    lifecycle: BookingLifecycleUseCase = Depends(get_booking_lifecycle_use_case),
    payments: DepositPaymentUseCase = Depends(get_deposit_payment_use_case),
):
    try:
        booking = lifecycle.get(booking_id)
        if booking.status != BookingStatus.AWAITING_PAYMENT:
            raise HTTPException(status_code=409, detail=f"Booking is {booking.status.value}, no deposit due")

        url = payments.begin_deposit(
            booking_id=booking.id,
            service_name=booking.service.name if booking.service else "appointment",
            customer_name=booking.customer_name,
            amount=settings.DEPOSIT_AMOUNT,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PaymentInitError as e:
        raise HTTPException(status_code=502, detail=f"Payment could not be started, please retry: {e}")
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return CheckoutResponseSchema(url=url)
