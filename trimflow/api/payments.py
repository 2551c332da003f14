from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from trimflow.application.dto.payment import PaymentReturnDTO
from trimflow.application.exceptions import NotFound, PaymentInitError, StoreError, ValidationError
from trimflow.application.use_cases.deposit_payment import DepositPaymentUseCase
from trimflow.wiring.dependencies import get_deposit_payment_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/payments/return")
def payment_return(
    success: bool = Query(False),
    canceled: bool = Query(False),
    booking_id: str | None = Query(None),
    session_id: str | None = Query(None),
    uc: DepositPaymentUseCase = Depends(get_deposit_payment_use_case),
) -> Response:
    """
    Landing point of the processor redirect.

    The query parameters are consumed here and the browser is sent on with a
    303 to a parameter-free location, so reload or back never replays them.
    """
    params = PaymentReturnDTO(
        success=success, canceled=canceled, booking_id=booking_id, session_id=session_id
    )
    if not params.booking_id:
        return RedirectResponse("/", status_code=303)

    outcome = "canceled"
    try:
        booking = uc.on_return(params.booking_id, params.succeeded, params.session_id)
        if booking is not None:
            outcome = booking.status.value
    except NotFound:
        logger.warning("Payment return for unknown booking", extra={"booking_id": params.booking_id})
        outcome = "unknown"
    except StoreError as e:
        logger.exception("Payment return failed", extra={"booking_id": params.booking_id, "error": str(e)})
        return Response(status_code=503)
    except PaymentInitError as e:
        logger.error("Payment return could not be verified", extra={"booking_id": params.booking_id, "error": str(e)})
        return Response(status_code=502)

    logger.info("Payment return handled", extra={"booking_id": params.booking_id, "status": outcome})
    return RedirectResponse(f"/api/v1/bookings/{params.booking_id}", status_code=303)


@router.post("/webhooks/stripe")
async def stripe_webhook(
    request: Request,
    uc: DepositPaymentUseCase = Depends(get_deposit_payment_use_case),
) -> Response:
    body = await request.body()
    signature = request.headers.get("Stripe-Signature")

    try:
        booking = await run_in_threadpool(uc.handle_processor_event, body, signature)
    except ValidationError as e:
        logger.warning("Rejected processor event", extra={"error": str(e)})
        return Response(status_code=400)
    except NotFound as e:
        logger.warning("Processor event for unknown booking", extra={"error": str(e)})
        return Response(status_code=200)
    except StoreError as e:
        logger.exception("Error applying processor event", extra={"error": str(e)})
        return Response(status_code=503)

    if booking is not None:
        logger.info("Processor event applied", extra={"booking_id": booking.id, "status": booking.status.value})
    return Response(status_code=200)
