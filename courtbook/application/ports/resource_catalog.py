from __future__ import annotations

from abc import ABC, abstractmethod

from courtbook.domain.entities.resource import Resource


class ResourceCatalogPort(ABC):
    @abstractmethod
    def get_resource(self, resource_id: str) -> Resource:
        """Get resource by id. Raises ResourceNotFoundError if unknown."""
        raise NotImplementedError
