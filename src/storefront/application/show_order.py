"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, UnauthorizedError
from storefront.domain.model.customer import Actor
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor, order_id: int) -> OrderDTO:
        """Return an order to its owner or to an administrator."""
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.user_id != actor.user_id and not actor.is_privileged:
            raise UnauthorizedError("You are not authorized to view this order")
        return order_to_dto(order)
