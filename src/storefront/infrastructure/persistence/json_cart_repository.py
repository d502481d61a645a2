"""JSON-document-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, document: dict) -> None:
        self._records: dict[str, list[dict]] = document["carts"]

    def get_for_user(self, user_id: str) -> Cart:
        lines = [
            CartLine(
                product_id=raw["product_id"],
                quantity=Quantity(raw["quantity"]),
                unit_price=Money(Decimal(raw["unit_price"])),
            )
            for raw in self._records.get(user_id, [])
        ]
        return Cart(user_id=user_id, lines=lines)

    def save(self, cart: Cart) -> None:
        if cart.is_empty:
            self._records.pop(cart.user_id, None)
            return
        self._records[cart.user_id] = [
            {
                "product_id": line.product_id,
                "quantity": line.quantity.value,
                "unit_price": str(line.unit_price.amount),
                "total_price": str(line.total_price.amount),
            }
            for line in cart.lines
        ]
