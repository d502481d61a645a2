"""Unit of Work: the transaction boundary for every use case.

Entering the context gives the caller exclusive access to the store.  Changes
made through the repositories become visible to others only on ``commit()``;
leaving the block without committing, including through an exception, throws
them all away.  A checkout therefore either decrements every product's stock
and records the order, or does neither.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    customers: CustomerRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._end()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since entering durable and visible."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""

    @abstractmethod
    def _begin(self) -> None:
        """Acquire exclusive access and load a working copy."""

    @abstractmethod
    def _end(self) -> None:
        """Release exclusive access."""
