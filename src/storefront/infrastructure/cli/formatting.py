"""Shared CLI output helpers: order tables, JSON envelopes, failures."""

from __future__ import annotations

import json
from typing import NoReturn

import click

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import DomainException


def echo_json(payload: dict) -> None:
    click.echo(json.dumps({"success": True, **payload}, indent=2))


def fail(exc: DomainException, as_json: bool = False) -> NoReturn:
    """Report a domain failure and stop with exit status 1."""
    if as_json:
        click.echo(json.dumps({"success": False, "error": exc.to_dict()}, indent=2))
        click.get_current_context().exit(1)
    raise click.ClickException(str(exc))


def display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Placed:   {dto.created_at}")
    if dto.cancelled_at:
        click.echo(f"Cancelled: {dto.cancelled_at} ({dto.reason_for_cancel})")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_title:<20} {item.quantity:>5} "
            f"{item.price_at_purchase:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_cost:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


def display_order_rows(dtos: list[OrderDTO]) -> None:
    if not dtos:
        click.echo("No orders found.")
        return
    click.echo(f"{'ID':<6} {'Customer':<12} {'Status':<12} {'Payment':<10} {'Total':>10}")
    click.echo("-" * 54)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.user_id:<12} {dto.status:<12} "
            f"{dto.payment_status:<10} {dto.total_amount:>10}"
        )
