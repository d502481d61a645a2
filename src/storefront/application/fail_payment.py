"""Application service: payment-failed webhook.

The money never arrived, so the stock reserved at checkout goes back to the
catalog.  The release is claimed on the order itself, which makes a
redelivered event, or one arriving after the customer already cancelled, a
no-op instead of a second restock.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import PaymentOutcome
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class FailPaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> PaymentOutcome:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            outcome = order.fail_payment()
            if outcome == PaymentOutcome.APPLIED:
                StockReservationService(uow.products).release_for_order(order)
                uow.orders.save(order)
                customer = uow.customers.get_by_id(order.user_id)
                if customer is not None:
                    customer.sync_order(order)
                    uow.customers.save(customer)
                uow.commit()

        if outcome == PaymentOutcome.IGNORED:
            logger.warning(
                "Payment failure ignored for order #%s (status=%s, payment=%s)",
                order_id,
                order.status.value,
                order.payment_status.value,
            )
        elif outcome == PaymentOutcome.DUPLICATE:
            logger.info("Duplicate payment failure for order #%s", order_id)
        else:
            logger.info("Payment failed for order #%s; stock released", order_id)
        return outcome
