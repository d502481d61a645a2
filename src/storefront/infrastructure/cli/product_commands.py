"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.set_stock import SetStockHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import ProductStatus
from storefront.infrastructure.bootstrap import Settings, unit_of_work


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.pass_obj
def product_add(settings: Settings, title: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    try:
        product = AddProductHandler(unit_of_work(settings)).handle(title, price, stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.title}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    try:
        with unit_of_work(settings) as uow:
            products = uow.products.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Title':<20} {'Price':>10} {'Stock':>7} {'Status':>9}")
    click.echo("-" * 56)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.title:<20} {str(p.price):>10} {p.stock:>7} {p.status.value:>9}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ProductStatus], case_sensitive=False),
    default=None,
    help="New sale status.",
)
@click.pass_obj
def product_update(
    settings: Settings, product_id: str, price: str | None, status: str | None
) -> None:
    """Update a product's price or status."""
    try:
        product = UpdateProductHandler(unit_of_work(settings)).handle(
            product_id, new_price=price, status=status
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} now {product.price}, {product.status.value}")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.pass_obj
def product_stock(settings: Settings, product_id: str, quantity: int) -> None:
    """Set the stock level for a product."""
    try:
        SetStockHandler(unit_of_work(settings)).handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product #{product_id} set to {quantity}")
