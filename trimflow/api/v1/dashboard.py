from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from trimflow.api.v1.auth import get_current_operator
from trimflow.api.v1.schemas import BookingSchema, DashboardSchema
from trimflow.application.exceptions import (
    AuthenticationError,
    InvalidTransition,
    NotFound,
    StoreError,
)
from trimflow.application.use_cases.operator_console import OperatorConsoleUseCase
from trimflow.domain.entities.booking import BookingStatus
from trimflow.domain.entities.operator import OperatorSession
from trimflow.wiring.dependencies import get_now, get_operator_console_use_case

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSchema)
def dashboard(
    operator: OperatorSession = Depends(get_current_operator),
    uc: OperatorConsoleUseCase = Depends(get_operator_console_use_case),
    now: datetime = Depends(get_now),
):
    try:
        snapshot = uc.dashboard(operator, now)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return DashboardSchema.from_snapshot(snapshot, now, lambda booking: uc.contact_link(operator, booking))


def _transition(
    uc: OperatorConsoleUseCase,
    operator: OperatorSession,
    booking_id: str,
    new_status: BookingStatus,
) -> BookingSchema:
    try:
        booking = uc.transition(operator, booking_id, new_status)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return BookingSchema.from_entity(booking, contact_link=uc.contact_link(operator, booking))


@router.post("/dashboard/bookings/{booking_id}/complete", response_model=BookingSchema)
def complete_booking(
    booking_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    uc: OperatorConsoleUseCase = Depends(get_operator_console_use_case),
):
    return _transition(uc, operator, booking_id, BookingStatus.COMPLETED)


@router.post("/dashboard/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    booking_id: str,
    operator: OperatorSession = Depends(get_current_operator),
    uc: OperatorConsoleUseCase = Depends(get_operator_console_use_case),
):
    return _transition(uc, operator, booking_id, BookingStatus.CANCELLED)
