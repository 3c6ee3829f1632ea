"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from shop.application.dto import ProductDTO, product_to_dto
from shop.domain.exceptions import (
    AlreadyExistsError,
    ConcurrentUpdateError,
    NotFoundError,
    ValidationError,
)
from shop.domain.model.product import check_stock
from shop.domain.model.user import Principal, Role
from shop.domain.model.value_objects import Money
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.authorization import require_role

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        product_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category_id: int | None = None,
    ) -> ProductDTO:
        """Update any subset of a product's fields.

        A price change does NOT affect existing orders; they captured a
        price snapshot at creation time.
        """
        require_role(principal, Role.ADMIN)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        if stock is not None:
            check_stock(stock)
        new_price = Money.of(price) if price is not None else None

        if category_id is not None:
            if self._category_repo.get_by_id(category_id) is None:
                raise NotFoundError(f"Category not found with id: {category_id}")
            product.category_id = category_id

        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product_id:
                raise AlreadyExistsError(f"Product '{name.strip()}' already exists")
            product.name = name.strip()
        if description is not None:
            product.description = description
        if new_price is not None:
            product.update_price(new_price)
        self._product_repo.save(product)
        if stock is not None:
            self._replace_stock(product_id, stock)
            product.stock = stock

        logger.info("product updated", extra={"product_id": product_id})
        return product_to_dto(product, self._category_repo.get_by_id(product.category_id))

    def _replace_stock(self, product_id: int, stock: int) -> None:
        """Set stock by compare-and-set, retrying when a reservation lands in between."""
        for _ in range(MAX_ATTEMPTS):
            current = self._product_repo.get_by_id(product_id)
            if current is None:
                raise NotFoundError(f"Product not found with id: {product_id}")
            if self._product_repo.compare_and_set_stock(product_id, current.stock, stock):
                return
        raise ConcurrentUpdateError(
            f"Stock of product {product_id} kept changing; try again"
        )
