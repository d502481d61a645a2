"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import InvalidRequestError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, title: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog with the next numeric ID."""
        if not title or not title.strip():
            raise InvalidRequestError("Product title is required")
        if stock < 0:
            raise InvalidRequestError("Stock cannot be negative")

        with self._uow as uow:
            ids = [int(p.id) for p in uow.products.list_all() if p.id.isdigit()]
            next_id = str(max(ids) + 1) if ids else "1"
            product = Product(
                id=next_id, title=title.strip(), price=Money.of(price), stock=stock
            )
            uow.products.save(product)
            uow.commit()
        return product
