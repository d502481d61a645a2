"""Application services: order listings (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import UnauthorizedError
from storefront.domain.model.customer import Actor
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListUserOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> list[OrderDTO]:
        """The actor's own orders, newest first."""
        with self._uow as uow:
            orders = uow.orders.list_by_user(actor.user_id)
        return [order_to_dto(order) for order in orders]


class ListAllOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> list[OrderDTO]:
        if not actor.is_privileged:
            raise UnauthorizedError("Access denied. SuperAdmin privileges required.")
        with self._uow as uow:
            orders = uow.orders.list_all()
        return [order_to_dto(order) for order in orders]
