from __future__ import annotations

from abc import ABC, abstractmethod

from trimflow.domain.entities.service import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        """List offerable services ordered by ascending price."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get a service by id. Returns None if not found."""
        raise NotImplementedError
