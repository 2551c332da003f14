"""
Tests for the deposit payment coordinator.
"""

from __future__ import annotations

import json
from decimal import Decimal
from urllib.parse import parse_qs, urlparse

import pytest

from trimflow.application.exceptions import PaymentInitError, ValidationError
from trimflow.application.use_cases.deposit_payment import DepositPaymentUseCase, to_minor_units
from trimflow.domain.entities.booking import BookingStatus
from trimflow.infrastructure.payments.mock_processor import MockPaymentProcessor


def test_to_minor_units():
    assert to_minor_units(10) == 1000
    assert to_minor_units(Decimal("12.50")) == 1250
    assert to_minor_units("0.015") == 2


def test_begin_deposit_tags_session_with_booking(make_booking, deposits, processor):
    booking = make_booking(requires_deposit=True)

    url = deposits.begin_deposit(booking.id, "Classic Cut", "Ali", Decimal("10"))

    assert url
    assert len(processor.sessions) == 1
    session = processor.sessions[0]
    assert session.booking_id == booking.id
    assert session.metadata["booking_id"] == booking.id
    assert session.amount_minor == 1000

    success = parse_qs(urlparse(session.success_url).query)
    assert success == {"success": ["true"], "booking_id": [booking.id], "session_id": ["{CHECKOUT_SESSION_ID}"]}
    cancel = parse_qs(urlparse(session.cancel_url).query)
    assert cancel == {"canceled": ["true"], "booking_id": [booking.id]}


def test_begin_deposit_validates_input(deposits, processor):
    with pytest.raises(ValidationError):
        deposits.begin_deposit("", "Classic Cut", "Ali", 10)
    with pytest.raises(ValidationError):
        deposits.begin_deposit("b-1", "Classic Cut", "Ali", 0)
    assert processor.sessions == []


def test_processor_failure_leaves_booking_awaiting_payment(make_booking, lifecycle, store):
    failing = DepositPaymentUseCase(
        processor=MockPaymentProcessor(fail_with="card network down"),
        lifecycle=lifecycle,
        return_url="http://testserver/payments/return",
    )
    booking = make_booking(requires_deposit=True)

    with pytest.raises(PaymentInitError, match="card network down"):
        failing.begin_deposit(booking.id, "Classic Cut", "Ali", 10)

    assert store.get(booking.id).status == BookingStatus.AWAITING_PAYMENT


def test_on_return_success_confirms_payment(make_booking, deposits, store):
    booking = make_booking(requires_deposit=True)

    result = deposits.on_return(booking.id, True)

    assert result.status == BookingStatus.PENDING
    assert store.get(booking.id).status == BookingStatus.PENDING


def test_on_return_verifies_processor_session(make_booking, deposits, store):
    booking = make_booking(requires_deposit=True)
    other = make_booking(requires_deposit=True)
    url = deposits.begin_deposit(booking.id, "Classic Cut", "Ali", 10)
    session_id = parse_qs(urlparse(url).query)["session_id"][0]

    assert deposits.on_return(booking.id, True, "cs_forged") is None
    assert deposits.on_return(other.id, True, session_id) is None
    assert store.get(booking.id).status == BookingStatus.AWAITING_PAYMENT
    assert store.get(other.id).status == BookingStatus.AWAITING_PAYMENT

    result = deposits.on_return(booking.id, True, session_id)
    assert result.status == BookingStatus.PENDING


def test_on_return_failure_leaves_state(make_booking, deposits, store):
    booking = make_booking(requires_deposit=True)

    assert deposits.on_return(booking.id, False) is None
    assert store.get(booking.id).status == BookingStatus.AWAITING_PAYMENT


def test_on_return_replayed(make_booking, deposits, lifecycle):
    booking = make_booking(requires_deposit=True)

    deposits.on_return(booking.id, True)
    lifecycle.mark_completed(booking.id)
    replay = deposits.on_return(booking.id, True)

    assert replay.status == BookingStatus.COMPLETED


def _event(event_type: str, booking_id: str | None, payment_status: str = "paid") -> bytes:
    metadata = {"booking_id": booking_id} if booking_id else {}
    return json.dumps(
        {
            "type": event_type,
            "data": {"object": {"id": "cs_test_1", "payment_status": payment_status, "metadata": metadata}},
        }
    ).encode("utf-8")


def test_processor_event_confirms_payment(make_booking, deposits):
    booking = make_booking(requires_deposit=True)

    result = deposits.handle_processor_event(_event("checkout.session.completed", booking.id), None)

    assert result.status == BookingStatus.PENDING


def test_processor_event_unpaid_or_unrelated_is_ignored(make_booking, deposits, store):
    booking = make_booking(requires_deposit=True)

    assert deposits.handle_processor_event(_event("checkout.session.completed", booking.id, "unpaid"), None) is None
    assert deposits.handle_processor_event(_event("payment_intent.created", booking.id), None) is None
    assert deposits.handle_processor_event(_event("checkout.session.completed", None), None) is None
    assert store.get(booking.id).status == BookingStatus.AWAITING_PAYMENT


def test_full_deposit_scenario(make_booking, deposits, console, operator, now):
    booking = make_booking(requires_deposit=True)
    assert booking.status == BookingStatus.AWAITING_PAYMENT

    url = deposits.begin_deposit(booking.id, booking.service.name, booking.customer_name, 10)
    assert booking.id in url

    deposits.on_return(booking.id, True)
    completed = console.transition(operator, booking.id, BookingStatus.COMPLETED)
    assert completed.status == BookingStatus.COMPLETED

    summary = console.summary(operator, now)
    assert summary.total_earned == Decimal("20")
    assert summary.pending_count == 0
