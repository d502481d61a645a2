"""Unit tests for the Order aggregate and its state machine."""

import pytest

from storefront.domain.exceptions import (
    InvalidReasonError,
    InvalidRequestError,
    InvalidStateTransitionError,
)
from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentOutcome,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity


def _item(pid: str = "A", qty: int = 1, price: str = "10.00") -> OrderItem:
    return OrderItem(
        product_id=pid,
        product_title=f"Product {pid}",
        quantity=Quantity(qty),
        price_at_purchase=Money.of(price),
    )


def _order(*items: OrderItem, shipping: str = "5.00") -> Order:
    order = Order.place(
        user_id="u1",
        items=list(items) or [_item()],
        shipping_cost=Money.of(shipping),
        shipping_address="1 Main St",
    )
    order.id = 1
    return order


class TestPlacement:

    def test_new_order_is_pending(self):
        order = _order()
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.payment_method == "PAY_ON_DELIVERY"

    def test_total_is_subtotal_plus_shipping(self):
        order = _order(_item("A", 2, "10.00"), _item("B", 1, "5.00"))
        assert order.subtotal == Money.of("25.00")
        assert order.total_amount == Money.of("30.00")
        assert order.items_count == 3

    def test_no_items_rejected(self):
        with pytest.raises(InvalidRequestError, match="at least one item"):
            Order.place("u1", [], Money.zero(), "1 Main St")

    def test_blank_address_rejected(self):
        with pytest.raises(InvalidRequestError, match="address"):
            Order.place("u1", [_item()], Money.zero(), "   ")

    def test_items_are_immutable(self):
        order = _order()
        assert isinstance(order.items, tuple)
        with pytest.raises(AttributeError):
            order.items[0].price_at_purchase = Money.of("1.00")


class TestCancel:

    def test_pending_order_cancels(self):
        order = _order()
        order.cancel("  changed my mind  ")
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.CANCELLED
        assert order.reason_for_cancel == "changed my mind"
        assert order.cancelled_at is not None

    def test_short_reason_rejected(self):
        with pytest.raises(InvalidReasonError, match="min 5 characters"):
            _order().cancel("nah ")

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED],
    )
    def test_non_pending_rejected(self, status):
        order = _order()
        order.status = status
        with pytest.raises(InvalidStateTransitionError, match=f"already {status.value}"):
            order.cancel("changed my mind")
        assert order.status == status
        assert order.reason_for_cancel is None


class TestPayment:

    def test_confirm(self):
        order = _order()
        assert order.confirm_payment() == PaymentOutcome.APPLIED
        assert order.status == OrderStatus.PROCESSING
        assert order.payment_status == PaymentStatus.PAID

    def test_confirm_twice_is_duplicate(self):
        order = _order()
        order.confirm_payment()
        assert order.confirm_payment() == PaymentOutcome.DUPLICATE
        assert order.status == OrderStatus.PROCESSING

    def test_confirm_after_cancel_is_ignored(self):
        order = _order()
        order.cancel("changed my mind")
        assert order.confirm_payment() == PaymentOutcome.IGNORED
        assert order.status == OrderStatus.CANCELLED

    def test_fail(self):
        order = _order()
        assert order.fail_payment() == PaymentOutcome.APPLIED
        assert order.payment_status == PaymentStatus.FAILED
        assert order.status == OrderStatus.PENDING

    def test_fail_twice_is_duplicate(self):
        order = _order()
        order.fail_payment()
        assert order.fail_payment() == PaymentOutcome.DUPLICATE

    def test_fail_after_paid_is_ignored(self):
        order = _order()
        order.confirm_payment()
        assert order.fail_payment() == PaymentOutcome.IGNORED
        assert order.payment_status == PaymentStatus.PAID


class TestFulfilment:

    def test_processing_to_shipped_to_delivered(self):
        order = _order()
        order.confirm_payment()
        order.advance_to(OrderStatus.SHIPPED)
        order.advance_to(OrderStatus.DELIVERED)
        assert order.status == OrderStatus.DELIVERED

    def test_processing_straight_to_delivered(self):
        order = _order()
        order.confirm_payment()
        order.advance_to(OrderStatus.DELIVERED)
        assert order.status == OrderStatus.DELIVERED

    def test_pending_cannot_ship(self):
        with pytest.raises(InvalidStateTransitionError, match="from PENDING to SHIPPED"):
            _order().advance_to(OrderStatus.SHIPPED)

    def test_delivered_is_terminal(self):
        order = _order()
        order.confirm_payment()
        order.advance_to(OrderStatus.DELIVERED)
        with pytest.raises(InvalidStateTransitionError):
            order.advance_to(OrderStatus.SHIPPED)


class TestReleaseStock:

    def test_first_release_returns_items(self):
        order = _order(_item("A", 2), _item("B", 1))
        released = order.release_stock()
        assert [(i.product_id, i.quantity.value) for i in released] == [("A", 2), ("B", 1)]
        assert order.stock_released

    def test_second_release_returns_nothing(self):
        order = _order()
        order.release_stock()
        assert order.release_stock() == []
