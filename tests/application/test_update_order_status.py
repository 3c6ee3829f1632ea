"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from shop.application.update_order_status import UpdateOrderStatusHandler
from shop.domain.exceptions import (
    ConcurrentUpdateError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from shop.domain.model.order import Order, OrderItem, OrderStatus
from shop.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository
from tests.helpers import ADMIN, ALICE


def _setup(status: OrderStatus = OrderStatus.CREATED):
    repo = FakeOrderRepository()
    order = Order.create(ALICE.user_id, [
        OrderItem(None, 1, "Widget", Quantity(2), Money.of("10.00")),
    ])
    order.status = status
    repo.save(order)
    return UpdateOrderStatusHandler(repo), repo, order.id


class TestUpdateOrderStatus:

    def test_created_to_confirmed(self):
        handler, repo, order_id = _setup()

        dto = handler.handle(ADMIN, order_id, OrderStatus.CONFIRMED)

        assert dto.status == "CONFIRMED"
        assert repo.get_by_id(order_id).status == OrderStatus.CONFIRMED

    def test_accepts_status_name(self):
        handler, repo, order_id = _setup()
        handler.handle(ADMIN, order_id, "shipped")
        assert repo.get_by_id(order_id).status == OrderStatus.SHIPPED

    def test_total_unchanged_by_status_update(self):
        handler, _, order_id = _setup()
        dto = handler.handle(ADMIN, order_id, OrderStatus.DELIVERED)
        assert dto.total_amount == "$20.00"

    @pytest.mark.parametrize("requested", list(OrderStatus))
    def test_cancelled_orders_are_frozen(self, requested):
        handler, repo, order_id = _setup(OrderStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            handler.handle(ADMIN, order_id, requested)

        assert repo.get_by_id(order_id).status == OrderStatus.CANCELLED

    def test_confirmed_cannot_revert_to_created(self):
        handler, repo, order_id = _setup(OrderStatus.CONFIRMED)

        with pytest.raises(InvalidTransitionError):
            handler.handle(ADMIN, order_id, OrderStatus.CREATED)

        assert repo.get_by_id(order_id).status == OrderStatus.CONFIRMED

    def test_same_status_allowed(self):
        handler, _, order_id = _setup(OrderStatus.CONFIRMED)
        assert handler.handle(ADMIN, order_id, OrderStatus.CONFIRMED).status == "CONFIRMED"

    def test_customer_forbidden(self):
        handler, repo, order_id = _setup()

        with pytest.raises(ForbiddenError):
            handler.handle(ALICE, order_id, OrderStatus.CONFIRMED)

        assert repo.get_by_id(order_id).status == OrderStatus.CREATED

    def test_missing_order(self):
        handler, _, _ = _setup()
        with pytest.raises(NotFoundError):
            handler.handle(ADMIN, 404, OrderStatus.CONFIRMED)

    def test_unknown_status_string(self):
        handler, _, order_id = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            handler.handle(ADMIN, order_id, "TELEPORTED")


class RacingOrderRepository(FakeOrderRepository):
    """Another admin cancels the order between our read and our write."""

    def compare_and_set_status(self, order_id, expected, new):
        stored = self._store[order_id]
        if stored.status != OrderStatus.CANCELLED:
            stored_copy = Order(
                id=stored.id,
                owner_id=stored.owner_id,
                items=stored.items,
                total_amount=stored.total_amount,
                status=OrderStatus.CANCELLED,
                created_at=stored.created_at,
            )
            self._store[order_id] = stored_copy
        return super().compare_and_set_status(order_id, expected, new)


class LosingOrderRepository(FakeOrderRepository):

    def compare_and_set_status(self, order_id, expected, new):
        return False


class TestUpdateOrderStatusRaces:

    def test_concurrent_cancel_is_respected(self):
        repo = RacingOrderRepository()
        repo.save(Order.create(ALICE.user_id, [
            OrderItem(None, 1, "Widget", Quantity(1), Money.of("1.00")),
        ]))
        handler = UpdateOrderStatusHandler(repo)

        with pytest.raises(InvalidTransitionError):
            handler.handle(ADMIN, 1, OrderStatus.CONFIRMED)

        assert repo.get_by_id(1).status == OrderStatus.CANCELLED

    def test_gives_up_after_bounded_retries(self):
        repo = LosingOrderRepository()
        repo.save(Order.create(ALICE.user_id, [
            OrderItem(None, 1, "Widget", Quantity(1), Money.of("1.00")),
        ]))

        with pytest.raises(ConcurrentUpdateError):
            UpdateOrderStatusHandler(repo).handle(ADMIN, 1, OrderStatus.CONFIRMED)
