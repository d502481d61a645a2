"""Port for the notification collaborator (order e-mails and the like).

Calls are fire-and-forget: handlers invoke them after committing and only log
whatever they raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderNotifier(ABC):

    @abstractmethod
    def notify_order_placed(self, order: Order) -> None:
        """Tell the customer and the shop that an order was placed."""

    @abstractmethod
    def notify_order_cancelled(self, order: Order, reason: str) -> None:
        """Tell the customer and the shop that an order was cancelled."""

    @abstractmethod
    def notify_payment_confirmed(self, order: Order) -> None:
        """Tell the customer and the shop that payment went through."""
