"""Abstract repository for Cart aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_user(self, user_id: str) -> Cart:
        """Return the user's cart; an empty one if nothing is stored."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart.  Saving an empty cart removes the record."""
