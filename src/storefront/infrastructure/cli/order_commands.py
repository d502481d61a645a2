"""CLI commands for placing and managing orders."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import DirectBuySpec, PlaceOrderRequest
from storefront.application.list_orders import (
    ListAllOrdersHandler,
    ListUserOrdersHandler,
)
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.customer import Actor, Role
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import Settings, notifier, unit_of_work
from storefront.infrastructure.cli.formatting import (
    display_order,
    display_order_rows,
    echo_json,
    fail,
)

_user_option = click.option("--user", "user_id", required=True, help="Acting user ID.")
_role_option = click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.USER.value,
    show_default=True,
    help="Role of the acting user.",
)
_json_option = click.option("--json", "as_json", is_flag=True, help="Print JSON.")


def _actor(user_id: str, role: str) -> Actor:
    return Actor(user_id=user_id, role=Role(role.upper()))


@click.command("place")
@_user_option
@click.option("--address", default=None, help="Ship to this address instead of the profile one.")
@click.option("--shipping-cost", default="0", show_default=True, help="Shipping cost, e.g. 5.00.")
@click.option("--product", "product_id", default=None, help="Direct buy: product ID (used only when the cart is empty).")
@click.option("--quantity", default=1, type=int, show_default=True, help="Direct buy: quantity.")
@_json_option
@click.pass_obj
def order_place(
    settings: Settings,
    user_id: str,
    address: str | None,
    shipping_cost: str,
    product_id: str | None,
    quantity: int,
    as_json: bool,
) -> None:
    """Place an order from the cart, or buy one product directly."""
    request = PlaceOrderRequest(
        shipping_cost=shipping_cost,
        shipping_address_override=address,
        direct_buy=DirectBuySpec(product_id, quantity) if product_id else None,
    )
    handler = PlaceOrderHandler(unit_of_work(settings), notifier())

    try:
        dto = handler.handle(user_id, request)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"order": dto.to_dict()})
        return
    click.echo(f"Order #{dto.id} placed ({dto.mode}).")
    display_order(dto)


@click.command("cancel")
@_user_option
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--reason", required=True, help="Why the order is cancelled (min 5 characters).")
@_json_option
@click.pass_obj
def order_cancel(
    settings: Settings, user_id: str, order_id: int, reason: str, as_json: bool
) -> None:
    """Cancel a pending order and put its stock back."""
    handler = CancelOrderHandler(unit_of_work(settings), notifier())

    try:
        dto = handler.handle(Actor(user_id), order_id, reason)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"order": dto.to_dict()})
        return
    click.echo(f"Order #{order_id} cancelled.")


@click.command("show")
@_user_option
@_role_option
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@_json_option
@click.pass_obj
def order_show(
    settings: Settings, user_id: str, role: str, order_id: int, as_json: bool
) -> None:
    """Show details of an order."""
    handler = ShowOrderHandler(unit_of_work(settings))

    try:
        dto = handler.handle(_actor(user_id, role), order_id)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"order": dto.to_dict()})
        return
    display_order(dto)


@click.command("mine")
@_user_option
@_json_option
@click.pass_obj
def order_mine(settings: Settings, user_id: str, as_json: bool) -> None:
    """List the acting user's orders, newest first."""
    try:
        dtos = ListUserOrdersHandler(unit_of_work(settings)).handle(Actor(user_id))
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"count": len(dtos), "orders": [d.to_dict() for d in dtos]})
        return
    display_order_rows(dtos)


@click.command("list")
@_user_option
@_role_option
@_json_option
@click.pass_obj
def order_list(settings: Settings, user_id: str, role: str, as_json: bool) -> None:
    """List every order (administrators only)."""
    try:
        dtos = ListAllOrdersHandler(unit_of_work(settings)).handle(_actor(user_id, role))
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"count": len(dtos), "orders": [d.to_dict() for d in dtos]})
        return
    display_order_rows(dtos)


@click.command("status")
@_user_option
@_role_option
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value], case_sensitive=False),
    help="New fulfilment status.",
)
@_json_option
@click.pass_obj
def order_status(
    settings: Settings,
    user_id: str,
    role: str,
    order_id: int,
    status: str,
    as_json: bool,
) -> None:
    """Move a paid order to SHIPPED or DELIVERED (administrators only)."""
    handler = UpdateOrderStatusHandler(unit_of_work(settings))

    try:
        dto = handler.handle(_actor(user_id, role), order_id, status)
    except DomainException as exc:
        fail(exc, as_json)

    if as_json:
        echo_json({"order": dto.to_dict()})
        return
    click.echo(f"Order #{order_id} is now {dto.status}.")
