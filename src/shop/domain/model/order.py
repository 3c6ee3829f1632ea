"""Order aggregate and its status rules.

The Order owns its items by value. Items point at products by id only
and carry a snapshot of the product's name and price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shop.domain.exceptions import InvalidTransitionError, ValidationError
from shop.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CREATED = "CREATED"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw: str | OrderStatus) -> OrderStatus:
        """Accept an OrderStatus or its name (case-insensitive)."""
        if isinstance(raw, OrderStatus):
            return raw
        try:
            return cls[raw.strip().upper()]
        except (KeyError, AttributeError):
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Unknown order status {raw!r} (expected one of: {allowed})"
            ) from None


TERMINAL_STATUSES = frozenset({OrderStatus.CANCELLED})


def validate_transition(current: OrderStatus, requested: OrderStatus) -> None:
    """Reject the two forbidden status changes.

    Everything not named here is allowed, including re-applying the
    current status.
    """
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Cannot update status of {current.value} order"
        )
    if current == OrderStatus.CONFIRMED and requested == OrderStatus.CREATED:
        raise InvalidTransitionError(
            f"Cannot move order back from {current.value} to {requested.value}"
        )


@dataclass(frozen=True)
class OrderItem:
    """One line of an order.

    ``unit_price`` is the product price captured when the order was
    placed; it is never re-read from the catalog.
    """

    id: int | None
    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders; it computes the total once.
    The ``__init__`` is intentionally simple so the repository can
    reconstitute persisted orders without recomputing anything.
    """

    id: int | None
    owner_id: int
    items: list[OrderItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.CREATED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(owner_id: int, items: list[OrderItem]) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            owner_id=owner_id,
            items=list(items),
            total_amount=total,
            status=OrderStatus.CREATED,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id
