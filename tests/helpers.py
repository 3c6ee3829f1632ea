"""Shared builders for tests."""

from __future__ import annotations

from shop.domain.model.category import Category
from shop.domain.model.product import Product
from shop.domain.model.user import Principal, Role
from shop.domain.model.value_objects import Money

ADMIN = Principal(user_id=1, username="admin", role=Role.ADMIN)
ALICE = Principal(user_id=2, username="alice", role=Role.CUSTOMER)
BOB = Principal(user_id=3, username="bob", role=Role.CUSTOMER)


def make_product(
    product_id: int,
    name: str,
    price: str = "10.00",
    stock: int = 10,
    category_id: int = 1,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=Money.of(price),
        stock=stock,
        category_id=category_id,
    )


def make_category(category_id: int = 1, name: str = "Gadgets") -> Category:
    return Category(id=category_id, name=name)
