"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from shop.domain.model.order import Order, OrderItem, OrderStatus
from shop.domain.model.value_objects import Money, Quantity
from shop.domain.repository.order_repository import OrderRepository
from shop.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def list_by_owner(self, owner_id: int) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["owner_id"] == owner_id
        ]

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()

            if order.id is None:
                order.id = JsonFile.next_id(orders)

            next_item_id = max(
                (i["id"] for o in orders for i in o["items"]), default=0
            ) + 1
            items = []
            for item in order.items:
                if item.id is None:
                    item = replace(item, id=next_item_id)
                    next_item_id += 1
                items.append(item)
            order.items = items

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

            self._file.persist(orders)

    def compare_and_set_status(
        self, order_id: int, expected: OrderStatus, new: OrderStatus
    ) -> bool:
        with self._file.locked():
            orders = self._file.load()
            for raw in orders:
                if raw["id"] == order_id:
                    if raw["status"] != expected.value:
                        return False
                    raw["status"] = new.value
                    self._file.persist(orders)
                    return True
            return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "owner_id": order.owner_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            owner_id=raw["owner_id"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"])),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
