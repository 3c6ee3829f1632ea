"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shop.domain.service.inventory_ledger import InventoryLedger
from shop.infrastructure.config import Settings
from shop.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from shop.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from shop.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shop.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def category_repository(settings: Settings) -> JsonCategoryRepository:
    return JsonCategoryRepository(settings.data_dir / "categories.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def user_repository(settings: Settings) -> JsonUserRepository:
    return JsonUserRepository(settings.data_dir / "users.json")


def inventory_ledger(settings: Settings) -> InventoryLedger:
    return InventoryLedger(
        product_repository(settings),
        max_attempts=settings.reservation_attempts,
    )
