"""End-to-end CLI tests against a temporary store directory."""

import json

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


@pytest.fixture
def shop(run):
    """Catalog: #1 Hoodie $10 x5, #2 Cap $5 x3.  Customers: u1, u2, admin."""
    for args in (
        ["product", "add", "--title", "Hoodie", "--price", "10.00", "--stock", "5"],
        ["product", "add", "--title", "Cap", "--price", "5.00", "--stock", "3"],
        ["customer", "add", "--id", "u1", "--name", "Ayesha", "--address", "1 Main St"],
        ["customer", "add", "--id", "u2", "--name", "Bilal", "--address", "2 Main St"],
        ["customer", "add", "--id", "admin", "--name", "Root", "--role", "SUPERADMIN"],
    ):
        result = run(*args)
        assert result.exit_code == 0, result.output
    return run


def _json(result) -> dict:
    return json.loads(result.stdout)


def test_cart_checkout(shop):
    assert shop("cart", "add", "--user", "u1", "--product", "1", "--quantity", "2").exit_code == 0
    assert shop("cart", "add", "--user", "u1", "--product", "2").exit_code == 0

    result = shop("order", "place", "--user", "u1", "--shipping-cost", "5", "--json")

    assert result.exit_code == 0, result.output
    payload = _json(result)
    assert payload["success"] is True
    assert payload["order"]["total_amount"] == "$30.00"
    assert payload["order"]["mode"] == "CART"

    listing = shop("product", "list")
    assert "Hoodie" in listing.output
    assert "Cart is empty." in shop("cart", "show", "--user", "u1").output


def test_direct_buy_over_stock_reports_structured_error(shop):
    result = shop("order", "place", "--user", "u1", "--product", "2", "--quantity", "10", "--json")

    assert result.exit_code == 1
    payload = _json(result)
    assert payload["success"] is False
    assert payload["error"]["code"] == "INSUFFICIENT_STOCK"
    assert payload["error"]["available"] == 3


def test_empty_cart_without_direct_buy(shop):
    result = shop("order", "place", "--user", "u1", "--json")
    assert result.exit_code == 1
    assert _json(result)["error"]["code"] == "INVALID_REQUEST"


def test_plain_error_output(shop):
    result = shop("order", "cancel", "--user", "u1", "--id", "99", "--reason", "wrong size")
    assert result.exit_code == 1
    assert "Order #99 not found" in result.output


def test_cancel_restores_stock(shop):
    shop("order", "place", "--user", "u1", "--product", "2", "--quantity", "3")

    result = shop("order", "cancel", "--user", "u1", "--id", "1", "--reason", "wrong size")

    assert result.exit_code == 0, result.output
    assert "Order #1 cancelled." in result.output
    shown = _json(shop("order", "show", "--user", "u1", "--id", "1", "--json"))
    assert shown["order"]["status"] == "CANCELLED"
    assert shop("cart", "add", "--user", "u2", "--product", "2", "--quantity", "3").exit_code == 0


def test_payment_events_are_idempotent(shop):
    shop("order", "place", "--user", "u1", "--product", "1")

    first = _json(shop("payment", "confirmed", "--id", "1", "--json"))
    again = _json(shop("payment", "confirmed", "--id", "1", "--json"))
    late_failure = _json(shop("payment", "failed", "--id", "1", "--json"))

    assert first["outcome"] == "APPLIED"
    assert again["outcome"] == "DUPLICATE"
    assert late_failure["outcome"] == "IGNORED"


def test_admin_moves_order_through_fulfilment(shop):
    shop("order", "place", "--user", "u1", "--product", "1")
    shop("payment", "confirmed", "--id", "1")

    refused = shop("order", "status", "--user", "u1", "--id", "1", "--status", "SHIPPED")
    shipped = shop(
        "order", "status", "--user", "admin", "--role", "SUPERADMIN",
        "--id", "1", "--status", "SHIPPED",
    )

    assert refused.exit_code == 1
    assert shipped.exit_code == 0, shipped.output
    assert "Order #1 is now SHIPPED." in shipped.output


def test_order_listings(shop):
    shop("order", "place", "--user", "u1", "--product", "1")
    shop("order", "place", "--user", "u2", "--product", "2")

    mine = _json(shop("order", "mine", "--user", "u1", "--json"))
    everything = _json(shop("order", "list", "--user", "admin", "--role", "SUPERADMIN", "--json"))

    assert [o["id"] for o in mine["orders"]] == [1]
    assert everything["count"] == 2
    assert shop("order", "list", "--user", "u1").exit_code == 1


def test_customer_history(shop):
    shop("order", "place", "--user", "u1", "--product", "1")
    result = shop("customer", "show", "--id", "u1")
    assert "Ayesha (u1, USER)" in result.output
    assert "PENDING" in result.output


def test_data_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path / "env-store"))
    result = CliRunner().invoke(cli, ["product", "add", "--title", "Mug", "--price", "3"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "env-store" / "storefront.json").exists()
