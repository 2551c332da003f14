from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from trimflow.application.exceptions import StoreError
from trimflow.application.ports.booking_store import BookingStorePort
from trimflow.core.config import settings
from trimflow.domain.entities.booking import Booking, BookingStatus, NewBooking
from trimflow.infrastructure.supabase_rows import BOOKING_SELECT, booking_from_row, booking_to_row


class SupabaseBookingStore(BookingStorePort):
    """Bookings table over the PostgREST API, with the service embedded by foreign key."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_KEY
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._base_url or not self._api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for the Supabase store")

    def create(self, record: NewBooking) -> Booking:
        rows = self._request(
            "POST",
            params={"select": BOOKING_SELECT},
            json=booking_to_row(record),
        )
        if not rows:
            raise StoreError("Insert returned no booking")
        return self._parse(rows[0])

    def get(self, booking_id: str) -> Booking | None:
        rows = self._request(
            "GET",
            params={"select": BOOKING_SELECT, "id": f"eq.{booking_id}"},
        )
        return self._parse(rows[0]) if rows else None

    def update_status(
        self,
        booking_id: str,
        expected: BookingStatus,
        new: BookingStatus,
    ) -> Booking | None:
        # Filtering on the expected status makes the PATCH a compare-and-swap.
        rows = self._request(
            "PATCH",
            params={
                "select": BOOKING_SELECT,
                "id": f"eq.{booking_id}",
                "status": f"eq.{expected.value}",
            },
            json={"status": new.value},
        )
        return self._parse(rows[0]) if rows else None

    def query(self, statuses: Iterable[BookingStatus] | None = None) -> list[Booking]:
        params = {"select": BOOKING_SELECT, "order": "booking_time.asc"}
        if statuses is not None:
            params["status"] = "in.(" + ",".join(s.value for s in statuses) + ")"
        return [self._parse(row) for row in self._request("GET", params=params)]

    def _request(
        self,
        method: str,
        params: dict[str, str],
        json: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        url = f"{self._base_url}/rest/v1/bookings"
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Prefer": "return=representation",
        }
        try:
            response = self._client.request(method, url, params=params, json=json, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Supabase booking request failed", extra={"error": str(e), "reason": method})
            raise StoreError(f"Booking store unavailable: {e}") from e

        if isinstance(data, dict):
            return [data]
        return list(data or [])

    def _parse(self, row: dict[str, Any]) -> Booking:
        try:
            return booking_from_row(row)
        except (KeyError, ValueError) as e:
            self._logger.error("Malformed booking row", extra={"booking_id": row.get("id"), "error": str(e)})
            raise StoreError(f"Malformed booking row: {e}") from e
