import click

from storefront.infrastructure.bootstrap import Settings, configure_logging
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_decrease,
    cart_remove,
    cart_show,
)
from storefront.infrastructure.cli.customer_commands import customer_add, customer_show
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_mine,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.payment_commands import (
    payment_confirmed,
    payment_failed,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Store directory (env: STOREFRONT_DATA_DIR).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (env: STOREFRONT_LOG_LEVEL).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, log_level: str | None) -> None:
    """Storefront: orders, carts and stock."""
    settings = Settings.from_env(data_dir=data_dir, log_level=log_level)
    configure_logging(settings)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def payment() -> None:
    """Replay payment-gateway events."""


@cli.group()
def cart() -> None:
    """Manage a customer's cart."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_mine)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
payment.add_command(payment_confirmed)
payment.add_command(payment_failed)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_decrease)
cart.add_command(cart_remove)
cart.add_command(cart_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
customer.add_command(customer_add)
customer.add_command(customer_show)
