"""Product aggregate.

Products live independently of carts and orders.  Their ``stock`` counter is
the one piece of state shared by every concurrent checkout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import InsufficientStockError, InvalidRequestError
from storefront.domain.model.value_objects import Money


class ProductStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass
class Product:
    """A catalog entry.

    Invariant: ``stock`` is never negative.
    """

    id: str
    title: str
    price: Money
    stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise InvalidRequestError(f"Stock for {self.title} cannot be negative")

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    def available_for_sale(self) -> int:
        """Units that may be sold right now; inactive products sell nothing."""
        return self.stock if self.is_active else 0

    def ensure_can_supply(self, quantity: int) -> None:
        available = self.available_for_sale()
        if quantity > available:
            raise InsufficientStockError(self.id, self.title, available, quantity)

    def adjust_stock(self, delta: int) -> None:
        """Apply a stock change, refusing any change that would go below zero."""
        if self.stock + delta < 0:
            raise InsufficientStockError(self.id, self.title, self.stock, -delta)
        self.stock += delta

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Orders already placed keep their ``price_at_purchase``.
        """
        self.price = new_price
