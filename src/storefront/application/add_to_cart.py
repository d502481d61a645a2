"""Application service: Add To Cart use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InvalidRequestError
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_id: str, quantity: int = 1) -> CartDTO:
        """Add units of a product to the user's cart.

        The cart may not hold more of a product than is in stock right now.
        Stock is not reserved here; that happens only at checkout.
        """
        qty = Quantity(quantity)

        with self._uow as uow:
            if uow.customers.get_by_id(user_id) is None:
                raise EntityNotFoundError(f"User {user_id} not found")
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID {product_id} not found")
            if not product.is_active:
                raise InvalidRequestError(f"{product.title} is not available for sale")

            cart = uow.carts.get_for_user(user_id)
            product.ensure_can_supply(cart.quantity_of(product_id) + qty.value)
            cart.add_item(product, qty)
            uow.carts.save(cart)
            uow.commit()

        return cart_to_dto(cart)
