"""Application service: payment-confirmed webhook.

Gateways deliver events at least once, so a repeat is answered with
``PaymentOutcome.DUPLICATE`` and changes nothing.  A confirmation for an order
that is no longer awaiting payment (cancelled, or already failed) is ignored
and logged rather than resurrecting the order.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import PaymentOutcome
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger(__name__)


class ConfirmPaymentHandler:

    def __init__(self, uow: UnitOfWork, notifier: OrderNotifier) -> None:
        self._uow = uow
        self._notifier = notifier

    def handle(self, order_id: int) -> PaymentOutcome:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            outcome = order.confirm_payment()
            if outcome == PaymentOutcome.APPLIED:
                uow.orders.save(order)
                customer = uow.customers.get_by_id(order.user_id)
                if customer is not None:
                    customer.sync_order(order)
                    uow.customers.save(customer)
                uow.commit()

        if outcome == PaymentOutcome.IGNORED:
            logger.warning(
                "Payment confirmation ignored for order #%s (status=%s, payment=%s)",
                order_id,
                order.status.value,
                order.payment_status.value,
            )
            return outcome
        if outcome == PaymentOutcome.DUPLICATE:
            logger.info("Duplicate payment confirmation for order #%s", order_id)
            return outcome

        logger.info("Payment succeeded for order #%s", order_id)
        try:
            self._notifier.notify_payment_confirmed(order)
        except Exception:
            logger.exception("Payment notification failed for order #%s", order_id)
        return outcome
