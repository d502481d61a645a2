"""JSON-document-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):
    """Orders are keyed by their ID as a string (JSON object keys)."""

    def __init__(self, document: dict) -> None:
        self._document = document
        self._records: dict[str, dict] = document["orders"]

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._document["next_order_id"]

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._records.get(str(order_id))
        return self._to_domain(raw) if raw is not None else None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._records.values()]
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
            self._document["next_order_id"] = order.id + 1
        self._records[str(order.id)] = self._to_raw(order)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method,
            "shipping_address": order.shipping_address,
            "shipping_cost": str(order.shipping_cost.amount),
            "total_amount": str(order.total_amount.amount),
            "reason_for_cancel": order.reason_for_cancel,
            "created_at": order.created_at.isoformat(),
            "cancelled_at": order.cancelled_at.isoformat() if order.cancelled_at else None,
            "stock_released": order.stock_released,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_title": item.product_title,
                    "quantity": item.quantity.value,
                    "price_at_purchase": str(item.price_at_purchase.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        # total_amount is stored for readers of the file; the aggregate
        # derives its own from the items.
        items = tuple(
            OrderItem(
                product_id=i["product_id"],
                product_title=i["product_title"],
                quantity=Quantity(i["quantity"]),
                price_at_purchase=Money(Decimal(i["price_at_purchase"])),
            )
            for i in raw["items"]
        )
        cancelled_at = raw.get("cancelled_at")
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            shipping_cost=Money(Decimal(raw["shipping_cost"])),
            shipping_address=raw["shipping_address"],
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            payment_method=raw["payment_method"],
            reason_for_cancel=raw.get("reason_for_cancel"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            cancelled_at=datetime.fromisoformat(cancelled_at) if cancelled_at else None,
            stock_released=raw.get("stock_released", False),
        )
