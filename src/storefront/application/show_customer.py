"""Application service: Show Customer use case (query)."""

from __future__ import annotations

from storefront.application.dto import CustomerDTO, customer_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowCustomerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> CustomerDTO:
        """Profile plus the order-history mirror."""
        with self._uow as uow:
            customer = uow.customers.get_by_id(user_id)
        if customer is None:
            raise EntityNotFoundError(f"User {user_id} not found")
        return customer_to_dto(customer)
