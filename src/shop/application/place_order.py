"""Application service: Place Order use case.

Orchestrates the inventory ledger and the Order aggregate. Stock for
every item is reserved inside one ``reserve_all`` block and the order
is saved inside that same block, so either the order is persisted with
all of its stock taken, or nothing changes.
"""

from __future__ import annotations

import logging

from shop.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from shop.domain.exceptions import ValidationError
from shop.domain.model.order import Order, OrderItem
from shop.domain.model.user import Principal, Role
from shop.domain.model.value_objects import Quantity
from shop.domain.repository.order_repository import OrderRepository
from shop.domain.service.authorization import require_role
from shop.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        ledger: InventoryLedger,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger

    def handle(self, principal: Principal, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Place a new order for the calling customer.

        Steps:
        1. Check the caller is a customer and the request is well-formed
           (before any stock is touched).
        2. Reserve stock for every item; each reservation carries the
           product's current price (snapshot).
        3. Build the Order, which computes its total once.
        4. Persist and return a DTO.
        """
        require_role(principal, Role.CUSTOMER)

        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        requests = [(spec.product_id, Quantity(spec.quantity)) for spec in item_specs]

        with self._ledger.reserve_all(requests) as reservations:
            items = [
                OrderItem(
                    id=None,
                    product_id=r.product_id,
                    product_name=r.product_name,
                    quantity=r.quantity,
                    unit_price=r.unit_price,  # <-- price snapshot
                )
                for r in reservations
            ]
            order = Order.create(owner_id=principal.user_id, items=items)
            self._order_repo.save(order)

        logger.info(
            "order placed",
            extra={"order_id": order.id, "owner_id": order.owner_id,
                   "total": str(order.total_amount.amount)},
        )
        return order_to_dto(order)
