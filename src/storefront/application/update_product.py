"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, InvalidRequestError
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        status: str | None = None,
    ) -> Product:
        """Change a product's price and/or sale status.

        Placed orders are unaffected; they hold their own price snapshot.
        Carts pick up the new price only when the product is added again.
        """
        if new_price is None and status is None:
            raise InvalidRequestError("Nothing to update")
        price = Money.of(new_price) if new_price is not None else None
        try:
            new_status = ProductStatus(status.upper()) if status is not None else None
        except ValueError as exc:
            raise InvalidRequestError(f"Unknown product status: {status!r}") from exc

        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            if price is not None:
                product.update_price(price)
            if new_status is not None:
                product.status = new_status
            uow.products.save(product)
            uow.commit()
        return product
