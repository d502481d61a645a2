"""Application service: Cancel Order use case.

Only the customer who placed an order may cancel it, and only while it is
still PENDING.  Cancelling puts every item's quantity back into stock (unless
a failed payment already did), marks both statuses CANCELLED and updates the
customer's order-history mirror, all in one unit of work.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, UnauthorizedError
from storefront.domain.model.customer import Actor
from storefront.domain.model.order import validate_cancel_reason
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_notifier import OrderNotifier
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, notifier: OrderNotifier) -> None:
        self._uow = uow
        self._notifier = notifier

    def handle(self, actor: Actor, order_id: int, reason: str) -> OrderDTO:
        reason = validate_cancel_reason(reason)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            if order.user_id != actor.user_id:
                raise UnauthorizedError("You are not authorized to cancel this order.")

            order.cancel(reason)
            StockReservationService(uow.products).release_for_order(order)
            uow.orders.save(order)

            customer = uow.customers.get_by_id(order.user_id)
            if customer is not None:
                customer.sync_order(order)
                uow.customers.save(customer)

            uow.commit()

        logger.info("Order #%s cancelled by %s: %s", order_id, actor.user_id, reason)
        try:
            self._notifier.notify_order_cancelled(order, reason)
        except Exception:
            logger.exception("Cancellation notification failed for order #%s", order_id)

        return order_to_dto(order)
