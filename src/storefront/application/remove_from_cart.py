"""Application service: take products out of a cart."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def decrease(self, user_id: str, product_id: str) -> CartDTO:
        """Remove a single unit of a product."""
        with self._uow as uow:
            cart = uow.carts.get_for_user(user_id)
            cart.decrease_item(product_id)
            uow.carts.save(cart)
            uow.commit()
        return cart_to_dto(cart)

    def remove(self, user_id: str, product_id: str) -> CartDTO:
        """Remove a product's line entirely."""
        with self._uow as uow:
            cart = uow.carts.get_for_user(user_id)
            cart.remove_item(product_id)
            uow.carts.save(cart)
            uow.commit()
        return cart_to_dto(cart)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> None:
        with self._uow as uow:
            cart = uow.carts.get_for_user(user_id)
            cart.clear()
            uow.carts.save(cart)
            uow.commit()
