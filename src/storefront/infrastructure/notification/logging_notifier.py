"""OrderNotifier that writes notifications to the log.

Stands in for the e-mail collaborator: each message the customer and the shop
would receive becomes one INFO record on the ``storefront.notifications``
logger.
"""

from __future__ import annotations

import logging

from storefront.domain.model.order import Order
from storefront.domain.service.order_notifier import OrderNotifier

logger = logging.getLogger("storefront.notifications")


class LoggingOrderNotifier(OrderNotifier):

    def notify_order_placed(self, order: Order) -> None:
        logger.info(
            "To %s: order #%s confirmed, %d item(s), total %s, ship to %s",
            order.user_id,
            order.id,
            order.items_count,
            order.total_amount,
            order.shipping_address,
        )
        logger.info("To admin: new order #%s from %s", order.id, order.user_id)

    def notify_order_cancelled(self, order: Order, reason: str) -> None:
        logger.info("To %s: order #%s cancelled (%s)", order.user_id, order.id, reason)
        logger.info(
            "To admin: order #%s cancelled by %s (%s)", order.id, order.user_id, reason
        )

    def notify_payment_confirmed(self, order: Order) -> None:
        logger.info(
            "To %s: payment of %s received for order #%s",
            order.user_id,
            order.total_amount,
            order.id,
        )
