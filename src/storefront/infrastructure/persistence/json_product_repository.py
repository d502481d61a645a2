"""JSON-document-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):
    """Works on the ``products`` section of a loaded store document."""

    def __init__(self, document: dict) -> None:
        self._records: dict[str, dict] = document["products"]

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._records.get(product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._records.values()]

    def save(self, product: Product) -> None:
        self._records[product.id] = self._to_raw(product)

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        raw = self._records.get(product_id)
        if raw is None:
            raise EntityNotFoundError(f"Product with ID {product_id} not found")
        product = self._to_domain(raw)
        product.adjust_stock(delta)
        raw["stock"] = product.stock
        return product

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "price": str(product.price.amount),
            "stock": product.stock,
            "status": product.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            title=raw["title"],
            price=Money(Decimal(raw["price"])),
            stock=raw["stock"],
            status=ProductStatus(raw.get("status", ProductStatus.ACTIVE.value)),
        )
