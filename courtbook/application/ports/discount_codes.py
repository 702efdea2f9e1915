from abc import ABC, abstractmethod

from courtbook.domain.entities.pricing import Discount


class DiscountCodePort(ABC):
    @abstractmethod
    def resolve(self, code: str) -> Discount | None:
        """Resolve a discount code. Returns None if the code is unknown."""
        raise NotImplementedError
