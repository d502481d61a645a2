"""Tests for the JSON-file store against a temporary directory."""

import json
import threading

import pytest

from storefront.application.dto import DirectBuySpec, PlaceOrderRequest
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import InsufficientStockError, StorageError
from storefront.domain.model.cart import Cart
from storefront.domain.model.customer import Actor, Customer
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.json_unit_of_work import (
    DOCUMENT_FILE,
    JsonUnitOfWork,
)
from tests.fakes import RecordingNotifier


def _seed(data_dir, stock: int = 5, users: int = 1) -> None:
    with JsonUnitOfWork(data_dir) as uow:
        uow.products.save(
            Product(id="A", title="Hoodie", price=Money.of("10.00"), stock=stock)
        )
        for i in range(1, users + 1):
            uow.customers.save(Customer(id=f"u{i}", name=f"User {i}", address="1 Main St"))
        uow.commit()


def _stock(data_dir) -> int:
    with JsonUnitOfWork(data_dir) as uow:
        return uow.products.get_by_id("A").stock


class TestPersistence:

    def test_missing_file_reads_as_empty_store(self, tmp_path):
        with JsonUnitOfWork(tmp_path / "fresh") as uow:
            assert uow.products.list_all() == []
            assert uow.orders.next_id() == 1

    def test_commit_survives_reload(self, tmp_path):
        _seed(tmp_path)
        with JsonUnitOfWork(tmp_path) as uow:
            product = uow.products.get_by_id("A")
            customer = uow.customers.get_by_id("u1")
        assert product.price == Money.of("10.00")
        assert customer.address == "1 Main St"

    def test_uncommitted_work_is_discarded(self, tmp_path):
        _seed(tmp_path)
        with JsonUnitOfWork(tmp_path) as uow:
            uow.products.adjust_stock("A", -3)
        assert _stock(tmp_path) == 5

    def test_exception_rolls_back(self, tmp_path):
        _seed(tmp_path)
        with pytest.raises(RuntimeError):
            with JsonUnitOfWork(tmp_path) as uow:
                uow.products.adjust_stock("A", -3)
                raise RuntimeError("boom")
        assert _stock(tmp_path) == 5

    def test_adjust_stock_refuses_negative(self, tmp_path):
        _seed(tmp_path, stock=2)
        with JsonUnitOfWork(tmp_path) as uow:
            with pytest.raises(InsufficientStockError):
                uow.products.adjust_stock("A", -3)
            assert uow.products.get_by_id("A").stock == 2

    def test_empty_cart_is_not_stored(self, tmp_path):
        _seed(tmp_path)
        with JsonUnitOfWork(tmp_path) as uow:
            cart = Cart(user_id="u1")
            cart.add_item(uow.products.get_by_id("A"), Quantity(2))
            uow.carts.save(cart)
            cart.clear()
            uow.carts.save(cart)
            uow.commit()
        document = json.loads((tmp_path / DOCUMENT_FILE).read_text())
        assert document["carts"] == {}

    def test_order_round_trip_through_handlers(self, tmp_path):
        _seed(tmp_path)
        dto = PlaceOrderHandler(JsonUnitOfWork(tmp_path), RecordingNotifier()).handle(
            "u1", PlaceOrderRequest(shipping_cost="4.50", direct_buy=DirectBuySpec("A", 2))
        )
        assert dto.id == 1
        assert dto.total_amount == "$24.50"
        assert _stock(tmp_path) == 3

        cancelled = CancelOrderHandler(JsonUnitOfWork(tmp_path), RecordingNotifier()).handle(
            Actor("u1"), dto.id, "Changed my mind"
        )
        assert cancelled.status == "CANCELLED"
        assert _stock(tmp_path) == 5

        with JsonUnitOfWork(tmp_path) as uow:
            order = uow.orders.get_by_id(dto.id)
            history = uow.customers.get_by_id("u1").order_history
            assert uow.orders.next_id() == 2
        assert order.stock_released
        assert order.items[0].price_at_purchase == Money.of("10.00")
        assert history[0].status.value == "CANCELLED"


class TestCorruption:

    def test_invalid_json(self, tmp_path):
        (tmp_path / DOCUMENT_FILE).write_text("{not json")
        with pytest.raises(StorageError, match="corrupt"):
            with JsonUnitOfWork(tmp_path):
                pass

    def test_wrong_schema_version(self, tmp_path):
        (tmp_path / DOCUMENT_FILE).write_text(json.dumps({"schema_version": 99}))
        with pytest.raises(StorageError, match="schema version"):
            with JsonUnitOfWork(tmp_path):
                pass

    def test_store_usable_after_error(self, tmp_path):
        (tmp_path / DOCUMENT_FILE).write_text("{not json")
        with pytest.raises(StorageError):
            with JsonUnitOfWork(tmp_path):
                pass
        (tmp_path / DOCUMENT_FILE).unlink()
        _seed(tmp_path)
        assert _stock(tmp_path) == 5

    @pytest.mark.parametrize(
        "content, message",
        [
            ([], "not a JSON object"),
            ({"schema_version": 1}, "missing products, customers, carts, orders"),
            ({"schema_version": 1, "products": {}, "customers": {}, "carts": {},
              "orders": []}, "missing orders"),
        ],
    )
    def test_malformed_document(self, tmp_path, content, message):
        (tmp_path / DOCUMENT_FILE).write_text(json.dumps(content))
        with pytest.raises(StorageError, match=message):
            with JsonUnitOfWork(tmp_path):
                pass

    @pytest.mark.parametrize("content", [[], {"schema_version": 1}])
    def test_lock_released_after_malformed_document(self, tmp_path, content):
        (tmp_path / DOCUMENT_FILE).write_text(json.dumps(content))
        with pytest.raises(StorageError):
            with JsonUnitOfWork(tmp_path):
                pass
        (tmp_path / DOCUMENT_FILE).unlink()

        opened = threading.Event()

        def open_store() -> None:
            with JsonUnitOfWork(tmp_path):
                opened.set()

        worker = threading.Thread(target=open_store, daemon=True)
        worker.start()
        worker.join(timeout=3)
        assert opened.is_set()


def test_concurrent_checkouts_never_oversell(tmp_path):
    _seed(tmp_path, stock=3, users=6)
    barrier = threading.Barrier(6)
    outcomes: list[str] = []

    def buy(user_id: str) -> None:
        handler = PlaceOrderHandler(JsonUnitOfWork(tmp_path), RecordingNotifier())
        barrier.wait()
        try:
            handler.handle(user_id, PlaceOrderRequest(direct_buy=DirectBuySpec("A", 1)))
            outcomes.append("ok")
        except InsufficientStockError:
            outcomes.append("out")

    threads = [threading.Thread(target=buy, args=(f"u{i}",)) for i in range(1, 7)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 3
    assert outcomes.count("out") == 3
    assert _stock(tmp_path) == 0
    with JsonUnitOfWork(tmp_path) as uow:
        assert sorted(o.id for o in uow.orders.list_all()) == [1, 2, 3]
