"""Application service: Register Customer use case."""

from __future__ import annotations

from storefront.domain.exceptions import InvalidRequestError
from storefront.domain.model.customer import Customer, Role
from storefront.domain.repository.unit_of_work import UnitOfWork


class RegisterCustomerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        name: str,
        address: str | None = None,
        role: str = Role.USER.value,
    ) -> Customer:
        if not user_id or not user_id.strip():
            raise InvalidRequestError("User ID is required")
        if not name or not name.strip():
            raise InvalidRequestError("Name is required")
        try:
            customer_role = Role(role.upper())
        except ValueError as exc:
            raise InvalidRequestError(f"Unknown role: {role!r}") from exc

        with self._uow as uow:
            if uow.customers.get_by_id(user_id.strip()) is not None:
                raise InvalidRequestError(f"User '{user_id}' already exists")
            customer = Customer(
                id=user_id.strip(),
                name=name.strip(),
                address=address.strip() if address and address.strip() else None,
                role=customer_role,
            )
            uow.customers.save(customer)
            uow.commit()
        return customer
