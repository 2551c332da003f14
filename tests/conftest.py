from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from trimflow.application.use_cases.booking_lifecycle import BookingLifecycleUseCase
from trimflow.application.use_cases.deposit_payment import DepositPaymentUseCase
from trimflow.application.use_cases.operator_console import OperatorConsoleUseCase
from trimflow.domain.entities.operator import OperatorSession
from trimflow.domain.entities.service import Service
from trimflow.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from trimflow.infrastructure.payments.mock_processor import MockPaymentProcessor
from trimflow.infrastructure.store.memory_store import MemoryBookingStore

TZ = ZoneInfo("Asia/Kuala_Lumpur")
NOW = datetime(2024, 3, 1, 9, 0, tzinfo=TZ)
RETURN_URL = "http://testserver/payments/return"

TEST_SERVICES = {
    "cut": Service(id="cut", name="Classic Cut", description="", duration_minutes=30, price=Decimal("20")),
    "beard": Service(id="beard", name="Beard Trim", description="", duration_minutes=20, price=Decimal("15")),
    "fade": Service(id="fade", name="Skin Fade", description="", duration_minutes=45, price=Decimal("30")),
}


@pytest.fixture
def catalog():
    return ServiceCatalogStore(dict(TEST_SERVICES))


@pytest.fixture
def store(catalog):
    return MemoryBookingStore(catalog=catalog)


@pytest.fixture
def lifecycle(store, catalog):
    return BookingLifecycleUseCase(store=store, catalog=catalog, timezone=TZ)


@pytest.fixture
def processor():
    return MockPaymentProcessor()


@pytest.fixture
def deposits(processor, lifecycle):
    return DepositPaymentUseCase(processor=processor, lifecycle=lifecycle, return_url=RETURN_URL)


@pytest.fixture
def console(store, lifecycle):
    return OperatorConsoleUseCase(store=store, lifecycle=lifecycle, business_name="TrimFlow")


@pytest.fixture
def operator():
    return OperatorSession(user_id="op-1", email="barber@example.com", access_token="token-1")


@pytest.fixture
def make_booking(lifecycle):
    def _make(service_id="cut", at=NOW, requires_deposit=False, name="Ali", phone="+60 12-345 6789"):
        return lifecycle.create(
            service_id=service_id,
            customer_name=name,
            customer_phone=phone,
            at=at,
            requires_deposit=requires_deposit,
        )

    return _make


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def now():
    return NOW
