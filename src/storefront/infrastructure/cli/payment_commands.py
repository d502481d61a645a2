"""CLI commands that replay payment-gateway webhook events."""

from __future__ import annotations

import click

from storefront.application.confirm_payment import ConfirmPaymentHandler
from storefront.application.fail_payment import FailPaymentHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import PaymentOutcome
from storefront.infrastructure.bootstrap import Settings, notifier, unit_of_work
from storefront.infrastructure.cli.formatting import echo_json, fail

_MESSAGES = {
    PaymentOutcome.APPLIED: "applied",
    PaymentOutcome.DUPLICATE: "already applied, nothing to do",
    PaymentOutcome.IGNORED: "ignored, order is not awaiting payment",
}


def _report(order_id: int, event: str, outcome: PaymentOutcome, as_json: bool) -> None:
    if as_json:
        echo_json({"order_id": order_id, "event": event, "outcome": outcome.value})
        return
    click.echo(f"Payment {event} for order #{order_id}: {_MESSAGES[outcome]}.")


@click.command("confirmed")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@click.pass_obj
def payment_confirmed(settings: Settings, order_id: int, as_json: bool) -> None:
    """Deliver a payment-succeeded event."""
    handler = ConfirmPaymentHandler(unit_of_work(settings), notifier())
    try:
        outcome = handler.handle(order_id)
    except DomainException as exc:
        fail(exc, as_json)
    _report(order_id, "confirmed", outcome, as_json)


@click.command("failed")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@click.pass_obj
def payment_failed(settings: Settings, order_id: int, as_json: bool) -> None:
    """Deliver a payment-failed event (releases the order's stock)."""
    handler = FailPaymentHandler(unit_of_work(settings))
    try:
        outcome = handler.handle(order_id)
    except DomainException as exc:
        fail(exc, as_json)
    _report(order_id, "failed", outcome, as_json)
