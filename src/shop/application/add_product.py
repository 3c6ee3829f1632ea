"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from shop.application.dto import ProductDTO, product_to_dto
from shop.domain.exceptions import AlreadyExistsError, NotFoundError
from shop.domain.model.product import Product
from shop.domain.model.user import Principal, Role
from shop.domain.model.value_objects import Money
from shop.domain.repository.category_repository import CategoryRepository
from shop.domain.repository.product_repository import ProductRepository
from shop.domain.service.authorization import require_role

logger = logging.getLogger(__name__)


class AddProductHandler:

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
        name: str,
        price: str,
        stock: int,
        category_id: int,
        description: str = "",
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        require_role(principal, Role.ADMIN)

        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Category not found with id: {category_id}")

        product = Product(
            id=None,
            name=name,
            description=description,
            price=Money.of(price),
            stock=stock,
            category_id=category_id,
        )
        if self._product_repo.get_by_name(product.name) is not None:
            raise AlreadyExistsError(f"Product '{product.name}' already exists")

        self._product_repo.save(product)
        logger.info(
            "product added",
            extra={"product_id": product.id, "stock": product.stock},
        )
        return product_to_dto(product, category)
