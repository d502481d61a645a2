"""Application service: Set Stock use case (catalog administration)."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError, InvalidRequestError
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int) -> None:
        """Overwrite the stock level for a product, e.g. after a stock take."""
        if quantity < 0:
            raise InvalidRequestError("Stock cannot be negative")

        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            uow.products.adjust_stock(product_id, quantity - product.stock)
            uow.commit()
        logger.info("Stock for %s set to %d", product_id, quantity)
