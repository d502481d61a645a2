"""Customer aggregate and the authenticated actor.

The customer keeps a denormalised copy of each order's status.  It is a read
convenience only: the Order aggregate is the source of truth, and the mirror is
always rewritten in the same unit of work as the order it describes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from storefront.domain.model.order import Order, OrderStatus, PaymentStatus


class Role(Enum):
    USER = "USER"
    SUPERADMIN = "SUPERADMIN"


@dataclass(frozen=True)
class Actor:
    """Identity supplied by the (already verified) authentication context."""

    user_id: str
    role: Role = Role.USER

    @property
    def is_privileged(self) -> bool:
        return self.role == Role.SUPERADMIN


@dataclass
class OrderHistoryEntry:
    order_id: int
    status: OrderStatus
    payment_status: PaymentStatus
    placed_at: datetime


@dataclass
class Customer:
    id: str
    name: str
    address: str | None = None
    role: Role = Role.USER
    order_history: list[OrderHistoryEntry] = field(default_factory=list)

    def record_order(self, order: Order) -> None:
        """Mirror a newly placed order into the history."""
        self.order_history.append(
            OrderHistoryEntry(
                order_id=order.id,  # type: ignore[arg-type]
                status=order.status,
                payment_status=order.payment_status,
                placed_at=order.created_at,
            )
        )

    def sync_order(self, order: Order) -> None:
        """Bring the mirror entry for ``order`` in line with the order."""
        for entry in self.order_history:
            if entry.order_id == order.id:
                entry.status = order.status
                entry.payment_status = order.payment_status
                return
        self.record_order(order)
