from __future__ import annotations

import logging

import httpx

from trimflow.application.exceptions import StoreError
from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.core.config import settings
from trimflow.domain.entities.service import Service
from trimflow.infrastructure.supabase_rows import SERVICE_COLUMNS, service_from_row


class SupabaseServiceCatalog(ServiceCatalogPort):
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
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for the Supabase catalog")

    def list_services(self) -> list[Service]:
        rows = self._fetch({"select": SERVICE_COLUMNS, "order": "price.asc"})
        return [s for s in (service_from_row(row) for row in rows) if s is not None]

    def get_service(self, service_id: str) -> Service | None:
        rows = self._fetch({"select": SERVICE_COLUMNS, "id": f"eq.{service_id}"})
        return service_from_row(rows[0]) if rows else None

    def _fetch(self, params: dict[str, str]) -> list[dict]:
        headers = {"apikey": self._api_key, "Authorization": f"Bearer {self._api_key}"}
        try:
            response = self._client.get(f"{self._base_url}/rest/v1/services", params=params, headers=headers)
            response.raise_for_status()
            return list(response.json() or [])
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error fetching services", extra={"error": str(e)})
            raise StoreError(f"Service catalog unavailable: {e}") from e
