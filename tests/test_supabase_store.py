"""
Tests for the Supabase PostgREST adapters, served by an httpx mock transport.
"""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from trimflow.application.exceptions import StoreError
from trimflow.domain.entities.booking import BookingStatus, NewBooking
from trimflow.infrastructure.catalog.supabase_catalog import SupabaseServiceCatalog
from trimflow.infrastructure.store.supabase_store import SupabaseBookingStore

SERVICE_ROW = {"id": "svc-1", "name": "Classic Cut", "description": "", "duration_minutes": 30, "price": 20}


def _row(status="awaiting_payment", **overrides):
    row = {
        "id": "b-1",
        "service_id": "svc-1",
        "customer_name": "Ali",
        "customer_phone": "0123",
        "booking_time": "2024-03-01T06:30:00Z",
        "status": status,
        "notes": None,
        "created_at": "2024-02-28T10:00:00+00:00",
        "services": SERVICE_ROW,
    }
    row.update(overrides)
    return row


def _store(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SupabaseBookingStore(base_url="https://db.example.co", api_key="anon", client=client)


def test_create_posts_row_and_parses_embedded_service(now):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["select"] = request.url.params.get("select")
        seen["body"] = json.loads(request.content)
        seen["prefer"] = request.headers.get("Prefer")
        return httpx.Response(201, json=[_row()])

    booking = _store(handler).create(
        NewBooking(
            service_id="svc-1",
            customer_name="Ali",
            customer_phone="0123",
            booking_time=now,
            status=BookingStatus.AWAITING_PAYMENT,
        )
    )

    assert seen["method"] == "POST"
    assert "services(" in seen["select"]
    assert seen["body"]["status"] == "awaiting_payment"
    assert seen["prefer"] == "return=representation"
    assert booking.status == BookingStatus.AWAITING_PAYMENT
    assert booking.service.price == Decimal("20")
    assert booking.booking_time.utcoffset().total_seconds() == 0


def test_update_status_filters_on_expected_status():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["id"] = request.url.params.get("id")
        seen["status"] = request.url.params.get("status")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[_row(status="pending")])

    updated = _store(handler).update_status("b-1", BookingStatus.AWAITING_PAYMENT, BookingStatus.PENDING)

    assert seen == {"id": "eq.b-1", "status": "eq.awaiting_payment", "body": {"status": "pending"}}
    assert updated.status == BookingStatus.PENDING


def test_update_status_lost_race_returns_none():
    store = _store(lambda request: httpx.Response(200, json=[]))
    assert store.update_status("b-1", BookingStatus.PENDING, BookingStatus.CANCELLED) is None


def test_query_orders_by_booking_time():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["order"] = request.url.params.get("order")
        seen["status"] = request.url.params.get("status")
        return httpx.Response(200, json=[_row(), _row(id="b-2", services=None)])

    bookings = _store(handler).query([BookingStatus.PENDING, BookingStatus.COMPLETED])

    assert seen == {"order": "booking_time.asc", "status": "in.(pending,completed)"}
    assert [b.id for b in bookings] == ["b-1", "b-2"]
    assert bookings[1].service is None


def test_unknown_status_is_a_store_error():
    store = _store(lambda request: httpx.Response(200, json=[_row(status="no_show")]))
    with pytest.raises(StoreError):
        store.get("b-1")


def test_http_failure_is_a_store_error():
    store = _store(lambda request: httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(StoreError):
        store.query()


def test_catalog_lists_by_price():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["order"] = request.url.params.get("order")
        return httpx.Response(200, json=[SERVICE_ROW])

    client = httpx.Client(transport=httpx.MockTransport(handler))
    catalog = SupabaseServiceCatalog(base_url="https://db.example.co", api_key="anon", client=client)

    services = catalog.list_services()

    assert seen["order"] == "price.asc"
    assert services[0].name == "Classic Cut"
    assert services[0].price == Decimal("20")
