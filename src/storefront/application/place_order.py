"""Application service: Place Order use case.

Checkout runs in one of two modes.  A non-empty cart always wins: its lines
are ordered and the cart is emptied.  Only when the cart is empty does a
direct-buy request (one product, one quantity) get used.

Everything from the first stock deduction to the cart clearing happens in a
single unit of work, so a failure at any point leaves stock, ledger, history
and cart exactly as they were.  The notification goes out after commit and
can never undo the order.
"""

from __future__ import annotations

import logging

from storefront.application.dto import (
    OrderDTO,
    PlaceOrderRequest,
    PlacementMode,
    order_to_dto,
)
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidRequestError,
    MissingAddressError,
)
from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_notifier import OrderNotifier
from storefront.domain.service.stock_reservation_service import (
    StockRequest,
    StockReservationService,
)

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, notifier: OrderNotifier) -> None:
        self._uow = uow
        self._notifier = notifier

    def handle(self, user_id: str, request: PlaceOrderRequest) -> OrderDTO:
        shipping_cost = Money.of(request.shipping_cost)

        with self._uow as uow:
            customer = uow.customers.get_by_id(user_id)
            if customer is None:
                raise EntityNotFoundError(f"User {user_id} not found")

            cart = uow.carts.get_for_user(user_id)
            if not cart.is_empty:
                mode = PlacementMode.CART
                requests = [
                    StockRequest(line.product_id, line.quantity)
                    for line in cart.lines
                ]
            elif request.direct_buy is not None:
                mode = PlacementMode.DIRECT_BUY
                requests = [
                    StockRequest(
                        request.direct_buy.product_id,
                        _direct_buy_quantity(request.direct_buy.quantity),
                    )
                ]
            else:
                raise InvalidRequestError(
                    "Either cart must not be empty or provide productId "
                    "& quantity for direct buy"
                )

            items = StockReservationService(uow.products).reserve(requests)
            address = _resolve_address(request.shipping_address_override, customer)

            order = Order.place(
                user_id=user_id,
                items=items,
                shipping_cost=shipping_cost,
                shipping_address=address,
            )
            uow.orders.save(order)

            customer.record_order(order)
            uow.customers.save(customer)

            if mode == PlacementMode.CART:
                cart.clear()
                uow.carts.save(cart)

            uow.commit()

        logger.info(
            "Order #%s placed by %s (%s, %d units, total %s)",
            order.id,
            user_id,
            mode.value,
            order.items_count,
            order.total_amount,
        )
        try:
            self._notifier.notify_order_placed(order)
        except Exception:
            logger.exception("Order-placed notification failed for order #%s", order.id)

        return order_to_dto(order, mode)


def _direct_buy_quantity(raw: int) -> Quantity:
    try:
        return Quantity(raw)
    except InvalidRequestError as exc:
        raise InvalidRequestError(
            "Valid quantity (>=1) required for direct buy"
        ) from exc


def _resolve_address(override: str | None, customer: Customer) -> str:
    if override and override.strip():
        return override.strip()
    if customer.address and customer.address.strip():
        return customer.address.strip()
    raise MissingAddressError(
        "Shipping address is required. Update profile or provide one."
    )
