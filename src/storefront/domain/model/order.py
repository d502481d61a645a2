"""Order aggregate: the ledger entry for a placed order.

An order's items and prices are fixed the moment it is placed.  After that
only the status pair and the cancellation metadata move, and only through the
transition methods below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    InvalidReasonError,
    InvalidRequestError,
    InvalidStateTransitionError,
)
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class PaymentOutcome(Enum):
    """What a payment event did to an order."""

    APPLIED = "APPLIED"
    DUPLICATE = "DUPLICATE"
    IGNORED = "IGNORED"


MIN_CANCEL_REASON_LENGTH = 5
PAYMENT_METHOD = "PAY_ON_DELIVERY"

# Fulfilment moves an administrator may make once payment has cleared.
_FULFILMENT_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.DELIVERED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    product_title: str
    quantity: Quantity
    price_at_purchase: Money

    @property
    def line_total(self) -> Money:
        return self.price_at_purchase * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    ``Order.place()`` builds new orders; the plain constructor exists so the
    repository can reconstitute stored ones.
    """

    id: int | None
    user_id: str
    items: tuple[OrderItem, ...]
    shipping_cost: Money
    shipping_address: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = PAYMENT_METHOD
    reason_for_cancel: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
    cancelled_at: datetime | None = None
    stock_released: bool = False

    @staticmethod
    def place(
        user_id: str,
        items: list[OrderItem],
        shipping_cost: Money,
        shipping_address: str,
    ) -> Order:
        if not items:
            raise InvalidRequestError("Order must contain at least one item")
        if not shipping_address or not shipping_address.strip():
            raise InvalidRequestError("Shipping address is required")
        return Order(
            id=None,
            user_id=user_id,
            items=tuple(items),
            shipping_cost=shipping_cost,
            shipping_address=shipping_address.strip(),
        )

    # --- Totals ---------------------------------------------------------------

    @property
    def subtotal(self) -> Money:
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        return total

    @property
    def total_amount(self) -> Money:
        return self.subtotal + self.shipping_cost

    @property
    def items_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    # --- Customer cancellation ------------------------------------------------

    def cancel(self, reason: str, now: datetime | None = None) -> None:
        """Transition PENDING -> CANCELLED.

        Restocking is the caller's job, via ``release_stock()``.
        """
        reason = validate_cancel_reason(reason)
        if self.status != OrderStatus.PENDING:
            raise InvalidStateTransitionError(
                f"Cannot cancel order #{self.id}. It is already {self.status.value}."
            )
        self.status = OrderStatus.CANCELLED
        self.payment_status = PaymentStatus.CANCELLED
        self.reason_for_cancel = reason
        self.cancelled_at = now or _utc_now()

    # --- Payment events -------------------------------------------------------

    def confirm_payment(self) -> PaymentOutcome:
        if self.payment_status == PaymentStatus.PAID:
            return PaymentOutcome.DUPLICATE
        if not self._awaiting_payment():
            return PaymentOutcome.IGNORED
        self.status = OrderStatus.PROCESSING
        self.payment_status = PaymentStatus.PAID
        return PaymentOutcome.APPLIED

    def fail_payment(self) -> PaymentOutcome:
        """Record a failed payment; the caller then releases the stock."""
        if self.payment_status == PaymentStatus.FAILED:
            return PaymentOutcome.DUPLICATE
        if not self._awaiting_payment():
            return PaymentOutcome.IGNORED
        self.payment_status = PaymentStatus.FAILED
        return PaymentOutcome.APPLIED

    # --- Fulfilment -----------------------------------------------------------

    def advance_to(self, status: OrderStatus) -> None:
        allowed = _FULFILMENT_TRANSITIONS.get(self.status, set())
        if status not in allowed:
            raise InvalidStateTransitionError(
                f"Cannot move order #{self.id} from {self.status.value} to {status.value}"
            )
        self.status = status

    # --- Stock bookkeeping ----------------------------------------------------

    def release_stock(self) -> list[OrderItem]:
        """Claim the order's reserved stock for return to the catalog.

        Returns the items to restock, or nothing if they were already
        returned.  Guarantees each order restocks at most once.
        """
        if self.stock_released:
            return []
        self.stock_released = True
        return list(self.items)

    def _awaiting_payment(self) -> bool:
        return (
            self.status == OrderStatus.PENDING
            and self.payment_status == PaymentStatus.PENDING
        )


def validate_cancel_reason(reason: str | None) -> str:
    cleaned = (reason or "").strip()
    if len(cleaned) < MIN_CANCEL_REASON_LENGTH:
        raise InvalidReasonError(
            "A valid reason for cancellation "
            f"(min {MIN_CANCEL_REASON_LENGTH} characters) is required."
        )
    return cleaned
