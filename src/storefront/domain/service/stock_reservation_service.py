"""Domain service: Stock Reservation.

Reserving stock means deducting it from the catalog at checkout; releasing it
is the exact inverse.  Both run inside the caller's unit of work.

Reservation is two-phase: every requested line is checked before any counter
moves, and each deduction then goes through the repository's conditional
``adjust_stock`` primitive, so stock can never be driven below zero even if a
check were stale.  Anything that fails after phase 2 starts is undone by the
unit of work's rollback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockRequest:
    product_id: str
    quantity: Quantity


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, requests: list[StockRequest]) -> list[OrderItem]:
        """Deduct stock for every request and return priced order items.

        Each item's ``price_at_purchase`` is the product's price right now,
        not whatever price the customer saw when filling the cart.
        """
        # Phase 1: load and validate everything
        checked: list[tuple[Product, StockRequest]] = []
        for request in requests:
            product = self._product_repo.get_by_id(request.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product with ID {request.product_id} not found"
                )
            product.ensure_can_supply(request.quantity.value)
            checked.append((product, request))

        # Phase 2: deduct
        items: list[OrderItem] = []
        for product, request in checked:
            updated = self._product_repo.adjust_stock(
                product.id, -request.quantity.value
            )
            logger.debug(
                "Reserved %d x %s (stock now %d)",
                request.quantity.value,
                product.id,
                updated.stock,
            )
            items.append(
                OrderItem(
                    product_id=product.id,
                    product_title=product.title,
                    quantity=request.quantity,
                    price_at_purchase=product.price,
                )
            )
        return items

    def release_for_order(self, order: Order) -> None:
        """Return an order's stock to the catalog, at most once per order."""
        for item in order.release_stock():
            try:
                updated = self._product_repo.adjust_stock(
                    item.product_id, item.quantity.value
                )
            except EntityNotFoundError:
                # Removed from the catalog since; nothing to put back.
                logger.warning(
                    "Cannot restock %s for order #%s: product no longer exists",
                    item.product_id,
                    order.id,
                )
                continue
            logger.debug(
                "Restocked %d x %s for order #%s (stock now %d)",
                item.quantity.value,
                item.product_id,
                order.id,
                updated.stock,
            )
