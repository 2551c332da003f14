from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from trimflow.application.exceptions import ValidationError
from trimflow.application.ports.auth import AuthPort
from trimflow.application.ports.booking_store import BookingStorePort
from trimflow.application.ports.payment_processor import PaymentProcessorPort
from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.application.use_cases.booking_lifecycle import BookingLifecycleUseCase
from trimflow.application.use_cases.deposit_payment import DepositPaymentUseCase
from trimflow.application.use_cases.operator_console import OperatorConsoleUseCase
from trimflow.core.config import settings
from trimflow.infrastructure.auth.memory_auth import MemoryAuthProvider
from trimflow.infrastructure.auth.supabase_auth import SupabaseAuthProvider
from trimflow.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from trimflow.infrastructure.catalog.supabase_catalog import SupabaseServiceCatalog
from trimflow.infrastructure.payments.mock_processor import MockPaymentProcessor
from trimflow.infrastructure.payments.stripe_checkout import StripeCheckoutProcessor
from trimflow.infrastructure.store.memory_store import MemoryBookingStore
from trimflow.infrastructure.store.supabase_store import SupabaseBookingStore

logger = logging.getLogger(__name__)

_catalog: ServiceCatalogPort | None = None
_booking_store: BookingStorePort | None = None
_auth: AuthPort | None = None
_payment_processor: PaymentProcessorPort | None = None


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


def _use_supabase() -> bool:
    return bool(settings.SUPABASE_URL and settings.SUPABASE_KEY) and not _is_local()


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def get_now() -> datetime:
    return datetime.now(get_timezone())


def get_service_catalog() -> ServiceCatalogPort:
    global _catalog
    if _catalog is None:
        _catalog = SupabaseServiceCatalog() if _use_supabase() else ServiceCatalogStore()
    return _catalog


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        if _use_supabase():
            _booking_store = SupabaseBookingStore()
        else:
            logger.info("Using MemoryBookingStore (ENV=%s)", settings.ENV)
            _booking_store = MemoryBookingStore(catalog=get_service_catalog())
    return _booking_store


def get_auth() -> AuthPort:
    global _auth
    if _auth is None:
        if _use_supabase():
            _auth = SupabaseAuthProvider()
        else:
            memory_auth = MemoryAuthProvider()
            if settings.OPERATOR_EMAIL and settings.OPERATOR_PASSWORD:
                try:
                    memory_auth.sign_up(settings.OPERATOR_EMAIL, settings.OPERATOR_PASSWORD)
                except ValidationError as e:
                    logger.warning("Operator account not seeded", extra={"error": str(e)})
            _auth = memory_auth
    return _auth


def get_payment_processor() -> PaymentProcessorPort:
    global _payment_processor
    if _payment_processor is None:
        if settings.STRIPE_SECRET_KEY:
            _payment_processor = StripeCheckoutProcessor()
        elif _is_local():
            logger.info("Using MockPaymentProcessor (STRIPE_SECRET_KEY missing, ENV=dev/local)")
            _payment_processor = MockPaymentProcessor()
        else:
            raise ValueError("STRIPE_SECRET_KEY is required to take deposits.")
    return _payment_processor


def get_booking_lifecycle_use_case() -> BookingLifecycleUseCase:
    return BookingLifecycleUseCase(
        store=get_booking_store(),
        catalog=get_service_catalog(),
        timezone=get_timezone(),
    )


def get_deposit_payment_use_case() -> DepositPaymentUseCase:
    return DepositPaymentUseCase(
        processor=get_payment_processor(),
        lifecycle=get_booking_lifecycle_use_case(),
        return_url=settings.PUBLIC_BASE_URL.rstrip("/") + "/payments/return",
    )


def get_operator_console_use_case() -> OperatorConsoleUseCase:
    return OperatorConsoleUseCase(
        store=get_booking_store(),
        lifecycle=get_booking_lifecycle_use_case(),
        business_name=settings.BUSINESS_NAME,
    )


def get_requires_deposit() -> bool:
    return settings.REQUIRE_DEPOSIT
