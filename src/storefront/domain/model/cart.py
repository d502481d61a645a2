"""Cart aggregate: one per customer, at most one line per product."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    product_id: str
    quantity: Quantity
    unit_price: Money  # price when last added, informational only

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:
    user_id: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> Money:
        total = Money.zero()
        for line in self.lines:
            total = total + line.total_price
        return total

    def line_for(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def quantity_of(self, product_id: str) -> int:
        line = self.line_for(product_id)
        return line.quantity.value if line else 0

    def add_item(self, product: Product, quantity: Quantity) -> CartLine:
        """Add units of a product, refreshing the line's price snapshot."""
        line = self.line_for(product.id)
        if line is None:
            line = CartLine(product.id, quantity, product.price)
            self.lines.append(line)
        else:
            line.quantity = line.quantity + quantity
            line.unit_price = product.price
        return line

    def decrease_item(self, product_id: str) -> None:
        """Take one unit off a line; the line disappears when it hits zero."""
        line = self._require_line(product_id)
        if line.quantity.value > 1:
            line.quantity = Quantity(line.quantity.value - 1)
        else:
            self.lines.remove(line)

    def remove_item(self, product_id: str) -> None:
        self.lines.remove(self._require_line(product_id))

    def clear(self) -> None:
        self.lines.clear()

    def _require_line(self, product_id: str) -> CartLine:
        line = self.line_for(product_id)
        if line is None:
            raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")
        return line
