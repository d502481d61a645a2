"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Atomically add ``delta`` to a product's stock.

        The change is applied only if the resulting stock is not negative;
        otherwise InsufficientStockError is raised and nothing changes.
        Raises EntityNotFoundError for an unknown product.
        """
