"""Unit tests for the Order aggregate and the status transition rules."""

import pytest

from shop.domain.exceptions import InvalidTransitionError, ValidationError
from shop.domain.model.order import Order, OrderItem, OrderStatus, validate_transition
from shop.domain.model.value_objects import Money, Quantity


def _make_item(product_id: int = 1, qty: int = 1, price: str = "15.00") -> OrderItem:
    return OrderItem(
        id=None,
        product_id=product_id,
        product_name=f"P{product_id}",
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(owner_id=7, items=[_make_item(qty=2, price="10.00")])
        assert order.owner_id == 7
        assert order.status == OrderStatus.CREATED
        assert order.id is None  # assigned by repository
        assert order.total_amount == Money.of("20.00")

    def test_total_is_sum_of_items(self):
        order = Order.create(7, [
            _make_item(1, qty=2, price="10.00"),
            _make_item(2, qty=1, price="5.00"),
        ])
        assert order.total_amount == Money.of("25.00")

    def test_item_order_preserved(self):
        order = Order.create(7, [_make_item(3), _make_item(1), _make_item(2)])
        assert [i.product_id for i in order.items] == [3, 1, 2]

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create(7, [])

    def test_total_not_recomputed_after_creation(self):
        order = Order.create(7, [_make_item(qty=1, price="10.00")])
        order.items.append(_make_item(2, qty=1, price="99.00"))
        assert order.total_amount == Money.of("10.00")


class TestOrderItem:

    def test_line_total(self):
        assert _make_item(qty=3, price="15.00").line_total == Money.of("45.00")

    def test_item_is_immutable(self):
        item = _make_item()
        with pytest.raises(AttributeError):
            item.unit_price = Money.of("1.00")


class TestStatusTransitions:

    @pytest.mark.parametrize("requested", list(OrderStatus))
    def test_cancelled_is_terminal(self, requested):
        with pytest.raises(InvalidTransitionError, match="CANCELLED"):
            validate_transition(OrderStatus.CANCELLED, requested)

    def test_confirmed_cannot_go_back_to_created(self):
        with pytest.raises(InvalidTransitionError):
            validate_transition(OrderStatus.CONFIRMED, OrderStatus.CREATED)

    def test_created_to_confirmed_allowed(self):
        validate_transition(OrderStatus.CREATED, OrderStatus.CONFIRMED)

    @pytest.mark.parametrize(
        "current, requested",
        [
            (OrderStatus.CREATED, OrderStatus.CREATED),
            (OrderStatus.CREATED, OrderStatus.CANCELLED),
            (OrderStatus.CONFIRMED, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.CREATED),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        ],
    )
    def test_everything_else_is_permitted(self, current, requested):
        validate_transition(current, requested)


class TestOrderStatusParse:

    def test_parse_name_case_insensitive(self):
        assert OrderStatus.parse("shipped") == OrderStatus.SHIPPED

    def test_parse_passes_enum_through(self):
        assert OrderStatus.parse(OrderStatus.DELIVERED) is OrderStatus.DELIVERED

    def test_unknown_status_is_validation_error(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("LOST")
