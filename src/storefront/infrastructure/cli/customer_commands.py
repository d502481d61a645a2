"""CLI commands for customers."""

from __future__ import annotations

import click

from storefront.application.register_customer import RegisterCustomerHandler
from storefront.application.show_customer import ShowCustomerHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.customer import Role
from storefront.infrastructure.bootstrap import Settings, unit_of_work


@click.command("add")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.option("--name", required=True, help="Display name.")
@click.option("--address", default=None, help="Default shipping address.")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.USER.value,
    show_default=True,
)
@click.pass_obj
def customer_add(
    settings: Settings, user_id: str, name: str, address: str | None, role: str
) -> None:
    """Register a customer."""
    try:
        customer = RegisterCustomerHandler(unit_of_work(settings)).handle(
            user_id, name, address, role
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer '{customer.id}' registered ({customer.role.value})")


@click.command("show")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.pass_obj
def customer_show(settings: Settings, user_id: str) -> None:
    """Show a customer and their order history."""
    try:
        dto = ShowCustomerHandler(unit_of_work(settings)).handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.name} ({dto.id}, {dto.role})")
    click.echo(f"Address: {dto.address or '-'}")
    if not dto.order_history:
        click.echo("No orders yet.")
        return
    click.echo()
    click.echo(f"  {'Order':<7} {'Status':<12} {'Payment':<10} {'Placed':<20}")
    for entry in dto.order_history:
        click.echo(
            f"  {entry.order_id:<7} {entry.status:<12} "
            f"{entry.payment_status:<10} {entry.placed_at:<20}"
        )
