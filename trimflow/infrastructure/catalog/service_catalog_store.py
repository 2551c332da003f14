from __future__ import annotations

from trimflow.application.ports.service_catalog import ServiceCatalogPort
from trimflow.domain.entities.service import Service
from trimflow.infrastructure.catalog.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[str, Service] | None = None) -> None:
        self._catalog = catalog if catalog is not None else SERVICE_CATALOG

    def list_services(self) -> list[Service]:
        return sorted(self._catalog.values(), key=lambda s: s.price)

    def get_service(self, service_id: str) -> Service | None:
        return self._catalog.get((service_id or "").strip())
