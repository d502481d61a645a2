"""Randomised run of checkout, cancel and payment events.

After every step, stock on hand plus units held by live orders must equal the
starting stock, no product may go negative, and every order's total must be
its lines plus shipping.
"""

import random

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.confirm_payment import ConfirmPaymentHandler
from storefront.application.dto import DirectBuySpec, PlaceOrderRequest
from storefront.application.fail_payment import FailPaymentHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import Cart
from storefront.domain.model.customer import Actor, Customer
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeUnitOfWork, RecordingNotifier

START_STOCK = {"A": 6, "B": 4, "C": 2}
USERS = ["u1", "u2", "u3"]


def _build() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        products=[
            Product(id=pid, title=f"Product {pid}", price=Money.of("3.50"), stock=qty)
            for pid, qty in START_STOCK.items()
        ],
        customers=[Customer(id=u, name=u, address="1 Main St") for u in USERS],
    )


def _check(uow: FakeUnitOfWork) -> None:
    held = {pid: 0 for pid in START_STOCK}
    for order in uow.orders.list_all():
        expected = Money.zero()
        for item in order.items:
            expected = expected + item.line_total
            if not order.stock_released:
                held[item.product_id] += item.quantity.value
        assert order.total_amount == expected + order.shipping_cost

    for pid, start in START_STOCK.items():
        stock = uow.products.get_by_id(pid).stock
        assert stock >= 0
        assert stock + held[pid] == start


@pytest.mark.parametrize("seed", range(5))
def test_stock_is_conserved(seed):
    rng = random.Random(seed)
    uow = _build()
    notifier = RecordingNotifier()
    place = PlaceOrderHandler(uow, notifier)
    cancel = CancelOrderHandler(uow, notifier)
    confirm = ConfirmPaymentHandler(uow, notifier)
    fail = FailPaymentHandler(uow)

    for _ in range(60):
        user = rng.choice(USERS)
        action = rng.choice(["cart", "direct", "cancel", "paid", "failed"])
        order_ids = [o.id for o in uow.orders.list_all()]
        try:
            if action == "cart":
                cart = Cart(user_id=user)
                for pid in rng.sample(sorted(START_STOCK), 2):
                    cart.add_item(uow.products.get_by_id(pid), Quantity(rng.randint(1, 3)))
                uow.carts.save(cart)
                place.handle(user, PlaceOrderRequest(shipping_cost="2.25"))
            elif action == "direct":
                pid = rng.choice(sorted(START_STOCK))
                place.handle(
                    user,
                    PlaceOrderRequest(direct_buy=DirectBuySpec(pid, rng.randint(1, 3))),
                )
            elif order_ids:
                order_id = rng.choice(order_ids)
                if action == "cancel":
                    owner = uow.orders.get_by_id(order_id).user_id
                    cancel.handle(Actor(owner), order_id, "random cancel")
                elif action == "paid":
                    confirm.handle(order_id)
                else:
                    fail.handle(order_id)
        except DomainException:
            pass
        _check(uow)
