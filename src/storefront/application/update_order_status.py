"""Application service: move a paid order through fulfilment (admin only)."""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidRequestError,
    UnauthorizedError,
)
from storefront.domain.model.customer import Actor
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor, order_id: int, status: str) -> OrderDTO:
        if not actor.is_privileged:
            raise UnauthorizedError("Access denied. SuperAdmin privileges required.")
        try:
            target = OrderStatus(status.upper())
        except ValueError as exc:
            raise InvalidRequestError(f"Unknown order status: {status!r}") from exc

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.advance_to(target)
            uow.orders.save(order)

            customer = uow.customers.get_by_id(order.user_id)
            if customer is not None:
                customer.sync_order(order)
                uow.customers.save(customer)

            uow.commit()

        logger.info("Order #%s moved to %s by %s", order_id, target.value, actor.user_id)
        return order_to_dto(order)
