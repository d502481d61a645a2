"""Data Transfer Objects: plain containers that cross layer boundaries.

Request DTOs carry what a caller asked for; output DTOs carry what it gets
back, already formatted, so neither the CLI nor a JSON client ever touches a
domain object.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum

from storefront.domain.model.cart import Cart
from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


class PlacementMode(Enum):
    CART = "CART"
    DIRECT_BUY = "DIRECT_BUY"


# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class DirectBuySpec:
    """A single product bought without going through the cart."""

    product_id: str
    quantity: int = 1


@dataclass(frozen=True)
class PlaceOrderRequest:
    shipping_cost: str = "0"
    shipping_address_override: str | None = None
    direct_buy: DirectBuySpec | None = None


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_title: str
    quantity: int
    price_at_purchase: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderItemDTO]
    subtotal: str
    shipping_cost: str
    total_amount: str
    items_count: int
    shipping_address: str
    created_at: str
    cancelled_at: str | None = None
    reason_for_cancel: str | None = None
    mode: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    quantity: int
    unit_price: str
    total_price: str


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    lines: list[CartLineDTO]
    subtotal: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderHistoryDTO:
    order_id: int
    status: str
    payment_status: str
    placed_at: str


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    address: str | None
    role: str
    order_history: list[OrderHistoryDTO] = field(default_factory=list)


# --- Mapping -----------------------------------------------------------------


def order_to_dto(order: Order, mode: PlacementMode | None = None) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_title=item.product_title,
                quantity=item.quantity.value,
                price_at_purchase=str(item.price_at_purchase),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        shipping_cost=str(order.shipping_cost),
        total_amount=str(order.total_amount),
        items_count=order.items_count,
        shipping_address=order.shipping_address,
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        cancelled_at=(
            order.cancelled_at.strftime(_TIMESTAMP_FORMAT)
            if order.cancelled_at
            else None
        ),
        reason_for_cancel=order.reason_for_cancel,
        mode=mode.value if mode else None,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        user_id=cart.user_id,
        lines=[
            CartLineDTO(
                product_id=line.product_id,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                total_price=str(line.total_price),
            )
            for line in cart.lines
        ],
        subtotal=str(cart.subtotal),
    )


def customer_to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        address=customer.address,
        role=customer.role.value,
        order_history=[
            OrderHistoryDTO(
                order_id=entry.order_id,
                status=entry.status.value,
                payment_status=entry.payment_status.value,
                placed_at=entry.placed_at.strftime(_TIMESTAMP_FORMAT),
            )
            for entry in customer.order_history
        ],
    )
