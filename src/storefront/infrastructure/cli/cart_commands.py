"""CLI commands for a customer's cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_from_cart import (
    ClearCartHandler,
    RemoveFromCartHandler,
)
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Settings, unit_of_work

_user_option = click.option("--user", "user_id", required=True, help="Cart owner's user ID.")
_product_option = click.option("--product", "product_id", required=True, help="Product ID.")


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*38}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<10} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.total_price:>10}"
        )
    click.echo(f"  {'-'*38}")
    click.echo(f"  {'Subtotal':<17} {dto.subtotal:>20}")


@click.command("add")
@_user_option
@_product_option
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
@click.pass_obj
def cart_add(settings: Settings, user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        dto = AddToCartHandler(unit_of_work(settings)).handle(user_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("decrease")
@_user_option
@_product_option
@click.pass_obj
def cart_decrease(settings: Settings, user_id: str, product_id: str) -> None:
    """Remove one unit of a product from the cart."""
    try:
        dto = RemoveFromCartHandler(unit_of_work(settings)).decrease(user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("remove")
@_user_option
@_product_option
@click.pass_obj
def cart_remove(settings: Settings, user_id: str, product_id: str) -> None:
    """Remove a product from the cart entirely."""
    try:
        dto = RemoveFromCartHandler(unit_of_work(settings)).remove(user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)


@click.command("clear")
@_user_option
@click.pass_obj
def cart_clear(settings: Settings, user_id: str) -> None:
    """Empty the cart."""
    try:
        ClearCartHandler(unit_of_work(settings)).handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo("Cart cleared.")


@click.command("show")
@_user_option
@click.pass_obj
def cart_show(settings: Settings, user_id: str) -> None:
    """Show the cart."""
    try:
        dto = ShowCartHandler(unit_of_work(settings)).handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_cart(dto)
