"""Tests for the JSON-file repositories, using pytest's tmp_path."""

import json
import multiprocessing
import threading

import pytest

from shop.application.dto import OrderItemSpec
from shop.application.place_order import PlaceOrderHandler
from shop.application.register_user import RegisterUserHandler
from shop.domain.exceptions import AlreadyExistsError, InsufficientStockError
from shop.domain.model.order import Order, OrderItem, OrderStatus
from shop.domain.model.user import Role, User
from shop.domain.model.value_objects import Money, Quantity
from shop.domain.service.inventory_ledger import InventoryLedger
from shop.infrastructure.persistence.json_category_repository import JsonCategoryRepository
from shop.infrastructure.persistence.json_order_repository import JsonOrderRepository
from shop.infrastructure.persistence.json_product_repository import JsonProductRepository
from shop.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.helpers import ALICE, make_category, make_product


def _place_orders(products_path, orders_path, attempts, results):
    handler = PlaceOrderHandler(
        JsonOrderRepository(orders_path),
        InventoryLedger(JsonProductRepository(products_path), max_attempts=1000),
    )
    placed = 0
    for _ in range(attempts):
        try:
            handler.handle(ALICE, [OrderItemSpec(1, 1)])
            placed += 1
        except InsufficientStockError:
            pass
    results.put(placed)


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_save_assigns_ids_and_reloads(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product(None, "Widget", price="12.50", stock=4)
        repo.save(product)

        assert product.id == 1
        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id(1)
        assert loaded.price == Money.of("12.50")
        assert loaded.stock == 4
        assert repo.get_by_name("WIDGET").id == 1

    def test_list_by_category_and_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(None, "A", category_id=1))
        repo.save(make_product(None, "B", category_id=2))
        repo.save(make_product(None, "C", category_id=1))

        assert [p.name for p in repo.list_by_category(1)] == ["A", "C"]
        repo.delete(1)
        assert [p.name for p in repo.list_all()] == ["B", "C"]

    def test_compare_and_set_stock(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(None, "Widget", stock=5))

        assert repo.compare_and_set_stock(1, 5, 2)
        assert not repo.compare_and_set_stock(1, 5, 1)
        assert not repo.compare_and_set_stock(1, 2, -1)
        assert not repo.compare_and_set_stock(99, 0, 0)
        assert repo.get_by_id(1).stock == 2

    def test_save_keeps_stored_stock(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(None, "Widget", price="10.00", stock=5))

        stale = repo.get_by_id(1)
        assert repo.compare_and_set_stock(1, 5, 3)
        stale.update_price(Money.of("12.00"))
        repo.save(stale)

        reloaded = repo.get_by_id(1)
        assert reloaded.stock == 3
        assert reloaded.price == Money.of("12.00")
        assert stale.stock == 3

    def test_concurrent_compare_and_set_across_instances(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(make_product(None, "Widget", stock=40))
        wins = []

        def take_one():
            repo = JsonProductRepository(path)
            for _ in range(10):
                current = repo.get_by_id(1).stock
                if current > 0 and repo.compare_and_set_stock(1, current, current - 1):
                    wins.append(1)

        threads = [threading.Thread(target=take_one) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert JsonProductRepository(path).get_by_id(1).stock == 40 - len(wins)

    @pytest.mark.skipif(
        "fork" not in multiprocessing.get_all_start_methods(),
        reason="needs the fork start method",
    )
    def test_separate_processes_never_oversell(self, tmp_path):
        products_path = tmp_path / "products.json"
        orders_path = tmp_path / "orders.json"
        JsonProductRepository(products_path).save(make_product(None, "Widget", stock=40))
        JsonOrderRepository(orders_path)

        ctx = multiprocessing.get_context("fork")
        results = ctx.Queue()
        workers = [
            ctx.Process(target=_place_orders, args=(products_path, orders_path, 15, results))
            for _ in range(4)
        ]
        for w in workers:
            w.start()
        placed = [results.get(timeout=120) for _ in workers]
        for w in workers:
            w.join()

        orders = JsonOrderRepository(orders_path).list_all()
        assert sum(placed) == 40
        assert JsonProductRepository(products_path).get_by_id(1).stock == 0
        assert len(orders) == 40
        assert len({o.id for o in orders}) == 40

    def test_save_rejects_duplicate_name(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(None, "Widget"))
        repo.save(make_product(None, "Gadget"))

        with pytest.raises(AlreadyExistsError):
            repo.save(make_product(None, "WIDGET"))
        renamed = repo.get_by_id(2)
        renamed.name = "widget"
        with pytest.raises(AlreadyExistsError):
            repo.save(renamed)
        assert [p.name for p in repo.list_all()] == ["Widget", "Gadget"]


class TestJsonOrderRepository:

    def _order(self, owner_id: int) -> Order:
        return Order.create(owner_id, [
            OrderItem(None, 1, "Widget", Quantity(2), Money.of("10.00")),
            OrderItem(None, 2, "Gadget", Quantity(1), Money.of("5.00")),
        ])

    def test_round_trip_preserves_snapshot_and_total(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = self._order(7)
        repo.save(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded.total_amount == Money.of("25.00")
        assert [i.id for i in loaded.items] == [1, 2]
        assert [i.unit_price for i in loaded.items] == [Money.of("10.00"), Money.of("5.00")]
        assert loaded.status == OrderStatus.CREATED
        assert loaded.created_at == order.created_at

    def test_item_ids_unique_across_orders(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(self._order(7))
        second = self._order(8)
        repo.save(second)
        assert [i.id for i in second.items] == [3, 4]

    def test_list_by_owner(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        for owner in (7, 8, 7):
            repo.save(self._order(owner))
        assert [o.id for o in repo.list_by_owner(7)] == [1, 3]
        assert len(repo.list_all()) == 3

    def test_compare_and_set_status(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(self._order(7))

        assert repo.compare_and_set_status(1, OrderStatus.CREATED, OrderStatus.CONFIRMED)
        assert not repo.compare_and_set_status(1, OrderStatus.CREATED, OrderStatus.CANCELLED)
        assert not repo.compare_and_set_status(2, OrderStatus.CREATED, OrderStatus.CANCELLED)
        assert repo.get_by_id(1).status == OrderStatus.CONFIRMED


class TestJsonCategoryAndUserRepositories:

    def test_category_upsert(self, tmp_path):
        repo = JsonCategoryRepository(tmp_path / "categories.json")
        category = make_category(None, "Gadgets")
        repo.save(category)
        category.description = "Shiny"
        repo.save(category)

        assert len(repo.list_all()) == 1
        assert repo.get_by_name("gadgets").description == "Shiny"
        repo.delete(category.id)
        assert repo.get_by_id(category.id) is None

    def test_user_round_trip(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User(None, "alice", "hash", "a@example.com", Role.CUSTOMER))

        loaded = repo.get_by_username("alice")
        assert loaded.id == 1
        assert loaded.role == Role.CUSTOMER
        assert repo.get_by_id(1).email == "a@example.com"
        assert repo.get_by_username("bob") is None

    def test_category_save_rejects_duplicate_name(self, tmp_path):
        repo = JsonCategoryRepository(tmp_path / "categories.json")
        repo.save(make_category(None, "Gadgets"))

        with pytest.raises(AlreadyExistsError):
            repo.save(make_category(None, "gadgets"))
        assert len(repo.list_all()) == 1

    def test_user_save_rejects_duplicate_username(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User(None, "bob", "hash", "b@example.com", Role.CUSTOMER))

        with pytest.raises(AlreadyExistsError, match="bob"):
            repo.save(User(None, "bob", "other", "b2@example.com", Role.ADMIN))
        assert repo.get_by_username("bob").email == "b@example.com"

    def test_concurrent_registration_keeps_usernames_unique(self, tmp_path):
        path = tmp_path / "users.json"
        barrier = threading.Barrier(6)
        outcomes = []

        def register():
            handler = RegisterUserHandler(JsonUserRepository(path), bcrypt_rounds=4)
            barrier.wait()
            try:
                handler.handle("bob", "pw", "bob@example.com")
                outcomes.append("ok")
            except AlreadyExistsError:
                outcomes.append("taken")

        threads = [threading.Thread(target=register) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["ok"] + ["taken"] * 5
        records = json.loads(path.read_text())
        assert [r["username"] for r in records] == ["bob"]
